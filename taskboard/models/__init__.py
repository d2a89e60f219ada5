from .task import CheckListItem, Task, TaskPriority, TaskStatus
from .user import User

# Export all models for easy importing
__all__ = ["CheckListItem", "Task", "TaskPriority", "TaskStatus", "User"]
