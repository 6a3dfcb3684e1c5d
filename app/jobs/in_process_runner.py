"""In-process task runner using asyncio.

Every submitted task gets its own asyncio.Task, so vendor calls for
different tasks overlap on the event loop. A sweeper task periodically
drops records past their retention window. No external dependencies
(Redis, Celery) needed.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Optional, Set

from app.effects.base import EffectSpec, Params
from app.errors import GatewayError
from app.jobs.dispatcher import TaskDispatcher
from app.jobs.models import TaskRecord
from app.storage.task_store import TaskStore

logger = logging.getLogger(__name__)

WorkerFn = Callable[[TaskRecord, EffectSpec, Params], Awaitable[str]]


class InProcessRunner(TaskDispatcher):
    """Fire-and-forget task runner backed by a TaskStore."""

    def __init__(
        self,
        store: TaskStore,
        worker_fn: WorkerFn,
        sweep_interval_seconds: float = 30 * 60,
    ):
        """
        worker_fn: async callable(task, spec, params) -> result URL
            Raises on failure; the runner records the terminal state.
        """
        self._store = store
        self._worker_fn = worker_fn
        self._sweep_interval = sweep_interval_seconds
        self._inflight: Set[asyncio.Task] = set()
        self._sweeper: Optional[asyncio.Task] = None
        self._running = False

    @property
    def store(self) -> TaskStore:
        return self._store

    @property
    def inflight(self) -> int:
        return len(self._inflight)

    async def submit(self, task: TaskRecord, spec: EffectSpec, params: Params) -> str:
        self._store.insert(task)
        runner = asyncio.create_task(self._run(task, spec, params), name=f"task-{task.id}")
        # keep a strong reference until done, the loop only holds weak ones
        self._inflight.add(runner)
        runner.add_done_callback(self._inflight.discard)
        return task.id

    async def get_status(self, task_id: str) -> Optional[TaskRecord]:
        return self._store.get(task_id)

    def counts(self) -> Dict[str, int]:
        return self._store.counts()

    async def start(self) -> None:
        self._running = True
        self._sweeper = asyncio.create_task(self._sweeper_loop(), name="task-sweeper")

    async def stop(self) -> None:
        self._running = False
        pending = list(self._inflight)
        if pending:
            logger.info("Cancelling %d in-flight task(s) on shutdown", len(pending))
        if self._sweeper:
            pending.append(self._sweeper)
        for t in pending:
            t.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    async def _run(self, task: TaskRecord, spec: EffectSpec, params: Params) -> None:
        try:
            result = await self._worker_fn(task, spec, params)
        except GatewayError as e:
            logger.error("Task %s (%s) failed: %s", task.id, spec.slug, e)
            self._store.fail(task.id, str(e) or type(e).__name__)
            return
        except Exception as e:
            logger.exception("Task %s (%s) crashed", task.id, spec.slug)
            self._store.fail(task.id, f"{type(e).__name__}: {e}")
            return

        if self._store.complete(task.id, result):
            logger.info("Task %s (%s) completed", task.id, spec.slug)

    async def _sweeper_loop(self) -> None:
        """Delete expired task records every sweep interval."""
        while self._running:
            await asyncio.sleep(self._sweep_interval)
            self.sweep()

    def sweep(self) -> int:
        removed = self._store.cleanup_expired()
        if removed:
            logger.info("Cleaned %d expired task(s)", removed)
        return removed
