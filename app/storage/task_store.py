"""In-memory task store with TTL-based cleanup."""

import logging
from collections import Counter
from datetime import datetime
from typing import Dict, Iterator, Optional

from app.jobs.models import TaskRecord, TaskStatus, utcnow

logger = logging.getLogger(__name__)


class TaskStore:
    """Owns every TaskRecord for the lifetime of the process.

    All methods are synchronous and never await, so when called from the
    event loop they cannot interleave with one another.
    """

    def __init__(self):
        self._tasks: Dict[str, TaskRecord] = {}

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: str) -> bool:
        return task_id in self._tasks

    def __iter__(self) -> Iterator[TaskRecord]:
        return iter(list(self._tasks.values()))

    def insert(self, record: TaskRecord) -> TaskRecord:
        if record.id in self._tasks:
            raise KeyError(f"Task {record.id} already exists")
        self._tasks[record.id] = record
        return record

    def get(self, task_id: str, now: Optional[datetime] = None) -> Optional[TaskRecord]:
        """Look up a task, deleting it instead if its retention has lapsed."""
        record = self._tasks.get(task_id)
        if record is None:
            return None
        if record.is_expired(now):
            del self._tasks[task_id]
            logger.info("Task %s expired on lookup", task_id)
            return None
        return record

    def complete(self, task_id: str, result: str) -> bool:
        return self._finish(task_id, TaskStatus.SUCCESS, result=result)

    def fail(self, task_id: str, error: str) -> bool:
        return self._finish(task_id, TaskStatus.FAILED, error=error)

    def _finish(
        self,
        task_id: str,
        status: TaskStatus,
        result: Optional[str] = None,
        error: Optional[str] = None,
    ) -> bool:
        """Apply the single terminal transition. Returns False if it was not applied."""
        record = self._tasks.get(task_id)
        if record is None:
            logger.warning("Task %s vanished before reaching %s", task_id, status.value)
            return False
        if record.status.is_terminal:
            logger.warning(
                "Task %s already %s, ignoring transition to %s",
                task_id, record.status.value, status.value,
            )
            return False
        record.status = status
        record.result = result
        record.error = error
        record.completed_at = utcnow()
        return True

    def cleanup_expired(self, now: Optional[datetime] = None) -> int:
        """Remove records older than their retention window. Returns count removed."""
        now = now or utcnow()
        expired = [tid for tid, rec in self._tasks.items() if rec.is_expired(now)]
        for tid in expired:
            del self._tasks[tid]
        return len(expired)

    def counts(self) -> Dict[str, int]:
        by_status = Counter(rec.status.value for rec in self._tasks.values())
        return {s.value: by_status.get(s.value, 0) for s in TaskStatus}
