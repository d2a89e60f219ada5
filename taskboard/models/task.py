from sqlmodel import SQLModel, Field, Column, JSON
from sqlalchemy import DateTime, Enum as SAEnum
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import uuid4
import enum

from ..timeutils import utcnow


class TaskPriority(str, enum.Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class TaskStatus(str, enum.Enum):
    BACKLOG = "backlog"
    TODO = "todo"
    IN_PROGRESS = "inProgress"
    DONE = "done"


def _enum_column(enum_cls, name: str, **kwargs) -> Column:
    # Stored by value; unknown strings fail on bind instead of reaching the table.
    return Column(
        SAEnum(
            enum_cls,
            name=name,
            native_enum=False,
            validate_strings=True,
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
        **kwargs,
    )


class CheckListItem(SQLModel):
    title: str = ""
    checked: bool = False


class Task(SQLModel, table=True):
    """Task model with its checklist and assignment fields."""
    __tablename__ = "tasks"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    title: str
    priority: TaskPriority = Field(sa_column=_enum_column(TaskPriority, "task_priority"))
    status: TaskStatus = Field(
        default=TaskStatus.TODO,
        sa_column=_enum_column(TaskStatus, "task_status", default=TaskStatus.TODO),
    )
    due_date: Optional[datetime] = Field(default=None, sa_type=DateTime)
    check_lists: List[Dict[str, Any]] = Field(sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, index=True, sa_type=DateTime)
    created_by: str = Field(foreign_key="users.id", index=True)
    assigned_by: Optional[str] = Field(default=None, foreign_key="users.id")
    assigned_to_email: str = Field(default="", index=True)
    shared_with: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    @property
    def is_expired(self) -> bool:
        if not self.due_date:
            return False
        return utcnow() > self.due_date
