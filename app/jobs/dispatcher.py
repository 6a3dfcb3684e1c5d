"""Task dispatcher interface."""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from app.effects.base import EffectSpec, Params
from app.jobs.models import TaskRecord


class TaskDispatcher(ABC):
    """Abstract interface for starting and tracking effect tasks."""

    @abstractmethod
    async def submit(self, task: TaskRecord, spec: EffectSpec, params: Params) -> str:
        """Record the task as pending and start its work. Returns task_id without waiting."""
        ...

    @abstractmethod
    async def get_status(self, task_id: str) -> Optional[TaskRecord]:
        """Get current state of a task; None if unknown or expired."""
        ...

    @abstractmethod
    def counts(self) -> Dict[str, int]:
        """Number of tracked tasks per status."""
        ...

    @abstractmethod
    async def start(self) -> None:
        """Start background housekeeping (e.g. expiry sweeper)."""
        ...

    @abstractmethod
    async def stop(self) -> None:
        """Stop the dispatcher, cancelling outstanding work."""
        ...
