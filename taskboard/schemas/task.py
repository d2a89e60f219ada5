from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import List, Optional

from ..models import CheckListItem, TaskPriority, TaskStatus
from ..timeutils import to_naive_utc


class _TaskSchema(BaseModel):
    class Config:
        from_attributes = True
        populate_by_name = True


class TaskCreate(_TaskSchema):
    """Schema for creating new tasks."""
    title: str = Field(min_length=1)
    priority: TaskPriority
    check_lists: List[CheckListItem] = Field(alias="checkLists")
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    status: Optional[TaskStatus] = None
    assigned_to_email: Optional[str] = None

    @field_validator("due_date", "created_at")
    @classmethod
    def _as_naive_utc(cls, value):
        return to_naive_utc(value)


class TaskUpdate(_TaskSchema):
    """Schema for updating existing tasks."""
    title: Optional[str] = Field(default=None, min_length=1)
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    check_lists: Optional[List[CheckListItem]] = Field(default=None, alias="checkLists")
    status: Optional[TaskStatus] = None
    assigned_to_email: Optional[str] = None

    @field_validator("due_date")
    @classmethod
    def _as_naive_utc(cls, value):
        return to_naive_utc(value)


class Assigner(BaseModel):
    id: str
    name: str
    email: str

    class Config:
        from_attributes = True


class Task(_TaskSchema):
    """Complete task schema as returned by the API."""
    id: str
    title: str
    priority: TaskPriority
    status: TaskStatus
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    check_lists: List[CheckListItem] = Field(alias="checkLists")
    created_at: datetime = Field(alias="createdAt")
    created_by: str = Field(alias="createdBy")
    assigned_by: Optional[str] = Field(default=None, alias="assignedBy")
    assigned_to_email: str = ""
    shared_with: List[str] = []
    is_expired: bool = Field(default=False, alias="isExpired")


class TaskWithAssigner(Task):
    """List entry with ``assignedBy`` resolved to the assigning user."""
    assigned_by: Optional[Assigner] = Field(default=None, alias="assignedBy")
