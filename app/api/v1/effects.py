"""Effect task API: start a task, poll its status, list available effects.

  POST /api/{effect}/start-task          validate params, start a task
  GET  /api/{effect}/status/{task_id}    poll until success / failed
  GET  /api/effects                      parameters and allowed values per effect

Responses use the {success, ...} envelope existing clients expect rather
than FastAPI's {detail} errors.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.config import settings
from app.effects.base import EffectSpec
from app.effects.registry import registry
from app.errors import EffectValidationError
from app.jobs.models import TaskRecord, TaskStatus

logger = logging.getLogger(__name__)

router = APIRouter()

# Wired in during lifespan (same pattern as health.py)
_dispatcher = None


def set_dispatcher(dispatcher):
    global _dispatcher
    _dispatcher = dispatcher


def _fail(status_code: int, error: str, **extra: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, **extra, "error": error},
    )


def _dispatcher_unavailable() -> JSONResponse:
    return _fail(503, "Task dispatcher not initialized")


# ---------------------------------------------------------------------------
# GET /api/effects
# ---------------------------------------------------------------------------

@router.get("/effects")
async def list_effects():
    """List every effect with its parameters and allowed values."""
    specs = registry.list_effects()
    return {
        "effects": [s.describe() for s in specs],
        "count": len(specs),
    }


# ---------------------------------------------------------------------------
# POST /api/{effect}/start-task
# ---------------------------------------------------------------------------

@router.post("/{effect}/start-task")
async def start_task(effect: str, request: Request):
    """Validate the body against the effect's allow-lists and start a task.

    Returns:
        {success: true, taskId} immediately; the vendor call runs in the background.
    """
    dispatcher = _dispatcher
    if dispatcher is None:
        return _dispatcher_unavailable()

    spec = registry.get(effect)
    if spec is None:
        return _fail(404, f"Unknown effect '{effect}'")

    try:
        body = await request.json()
    except ValueError:
        return _fail(400, "Request body must be a JSON object")
    if not isinstance(body, dict):
        return _fail(400, "Request body must be a JSON object")

    try:
        params = spec.validate(body)
    except EffectValidationError as e:
        return _fail(400, e.message)

    try:
        task = TaskRecord(
            effect=spec.slug,
            retention_seconds=spec.retention_seconds(settings.task_retention_hours),
        )
        task_id = await dispatcher.submit(task, spec, params)
    except Exception as e:
        logger.exception("Start task error (%s)", spec.slug)
        return _fail(500, str(e) or "Failed to start task")

    logger.info("Task %s (%s) started", task_id, spec.slug)
    return {"success": True, "taskId": task_id}


# ---------------------------------------------------------------------------
# GET /api/{effect}/status/{task_id}
# ---------------------------------------------------------------------------

@router.get("/{effect}/status/{task_id}")
async def get_task_status(effect: str, task_id: str):
    """Report a task's state.

    Returns:
        pending: {success, status, waitTime}
        success: {success, status, result, <imageUrl|videoUrl|audioUrl>, processTime}
        failed:  {success: false, status, error, processTime}  (HTTP 200)
        unknown or expired: HTTP 404 {success: false, status: "not_found", error}
    """
    dispatcher = _dispatcher
    if dispatcher is None:
        return _dispatcher_unavailable()

    spec = registry.get(effect)
    if spec is None:
        return _fail(404, f"Unknown effect '{effect}'")

    task = await dispatcher.get_status(task_id)
    if task is None or task.effect != spec.slug:
        return _fail(404, "Task not found or expired", status="not_found")

    return _status_body(task, spec)


def _status_body(task: TaskRecord, spec: EffectSpec) -> Dict[str, Any]:
    elapsed = task.elapsed_ms()
    if task.status == TaskStatus.SUCCESS:
        return {
            "success": True,
            "status": task.status.value,
            "result": task.result,
            spec.result_key: task.result,
            "processTime": elapsed,
        }
    if task.status == TaskStatus.FAILED:
        return {
            "success": False,
            "status": task.status.value,
            "error": task.error or "Processing failed",
            "processTime": elapsed,
        }
    return {
        "success": True,
        "status": task.status.value,
        "waitTime": elapsed,
    }
