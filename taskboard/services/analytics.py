from typing import Dict, Tuple

from sqlalchemy.orm import Session

from ..models import Task, TaskPriority, TaskStatus
from ..security import Identity


def _empty_counters() -> Tuple[Dict[str, int], Dict[str, int]]:
    status = {member.value: 0 for member in TaskStatus}
    priorities = {member.value: 0 for member in TaskPriority}
    priorities["due"] = 0
    return status, priorities


def get_analytics(db: Session, identity: Identity) -> Dict[str, Dict[str, int]]:
    """Count the caller's created and assigned tasks by status and priority.

    Expired tasks also count towards ``priorities["due"]``. A task the caller
    both created and is assigned to is counted once for each role.
    """
    created_tasks = db.query(Task).filter(Task.created_by == identity.id).all()
    assigned_tasks = db.query(Task).filter(Task.assigned_to_email == identity.email).all()

    status, priorities = _empty_counters()

    def count(task: Task) -> None:
        status[TaskStatus(task.status).value] += 1
        priorities[TaskPriority(task.priority).value] += 1
        if task.is_expired:
            priorities["due"] += 1

    # Unassigned tasks store "", which still counts as having an assignee.
    for task in created_tasks:
        if task.assigned_to_email is not None:
            count(task)

    for task in assigned_tasks:
        count(task)

    return {"status": status, "priorities": priorities}
