"""Task record data model for async effect processing."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field
import uuid


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not TaskStatus.PENDING


class TaskRecord(BaseModel):
    """Tracks one effect request from submission to terminal outcome."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    effect: str
    status: TaskStatus = TaskStatus.PENDING
    result: Optional[str] = None
    error: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    completed_at: Optional[datetime] = None
    retention_seconds: float = 2 * 3600

    def age_seconds(self, now: Optional[datetime] = None) -> float:
        return ((now or utcnow()) - self.created_at).total_seconds()

    def elapsed_ms(self, now: Optional[datetime] = None) -> int:
        """Milliseconds since creation, frozen at completion for terminal tasks."""
        end = self.completed_at or now or utcnow()
        return int((end - self.created_at).total_seconds() * 1000)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return self.age_seconds(now) > self.retention_seconds
