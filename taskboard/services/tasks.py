"""Task queries scoped to the authenticated caller.

Ownership is part of every mutating query's filter, so a task the caller
may not touch is indistinguishable from one that does not exist.
"""
import logging
import re
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import StatementError
from sqlalchemy.orm import Session

from ..config import DEFAULT_TASK_RANGE_DAYS
from ..errors import InvalidTaskIdError, NotFoundError, ValidationError
from ..models import Task, TaskStatus, User
from ..schemas.task import TaskCreate, TaskUpdate
from ..security import Identity
from ..timeutils import created_window

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Fields a PATCH may clear by sending null.
_NULLABLE_UPDATE_FIELDS = {"due_date"}


def parse_range(raw: Optional[str]) -> int:
    """Parse the ``range`` query value by its leading integer.

    Empty or non-numeric input falls back to the default window.
    """
    if not raw:
        return DEFAULT_TASK_RANGE_DAYS
    match = _LEADING_INT.match(raw)
    if not match:
        return DEFAULT_TASK_RANGE_DAYS
    return int(match.group(1))


def _visible_to(identity: Identity):
    return or_(Task.created_by == identity.id, Task.assigned_to_email == identity.email)


def _commit(db: Session) -> None:
    try:
        db.commit()
    except StatementError as exc:
        db.rollback()
        if isinstance(exc.orig, LookupError):
            raise ValidationError(str(exc.orig))
        raise


def create_task(db: Session, identity: Identity, payload: TaskCreate) -> Task:
    if not payload.check_lists:
        raise ValidationError("PLease fill at least one check list")

    task = Task(
        title=payload.title,
        priority=payload.priority,
        status=payload.status or TaskStatus.TODO,
        due_date=payload.due_date,
        check_lists=[item.model_dump() for item in payload.check_lists],
        created_by=identity.id,
        assigned_by=identity.id,
        assigned_to_email=payload.assigned_to_email or "",
    )
    if payload.created_at is not None:
        task.created_at = payload.created_at

    db.add(task)
    _commit(db)
    db.refresh(task)

    logger.info("User %s created task %s", identity.id, task.id)
    return task


def list_tasks(
    db: Session,
    identity: Identity,
    range_days: int = DEFAULT_TASK_RANGE_DAYS,
    now: Optional[datetime] = None,
) -> List[Tuple[Task, Optional[User]]]:
    """Tasks created by or assigned to the caller within the last ``range_days``.

    The window is ``(end_of_today - range_days, end_of_today]`` in UTC. Each
    task comes paired with the user it was assigned by.
    """
    lower, upper = created_window(range_days, now)
    tasks = (
        db.query(Task)
        .filter(_visible_to(identity))
        .filter(Task.created_at > lower, Task.created_at <= upper)
        .order_by(Task.created_at.desc())
        .all()
    )

    assigner_ids = {task.assigned_by for task in tasks if task.assigned_by}
    assigners: Dict[str, User] = {}
    if assigner_ids:
        assigners = {
            user.id: user
            for user in db.query(User).filter(User.id.in_(assigner_ids)).all()
        }
    return [(task, assigners.get(task.assigned_by)) for task in tasks]


def get_task(db: Session, task_id: str) -> Task:
    """Fetch any task by id; reads are not ownership-scoped."""
    task = db.get(Task, task_id)
    if task is None:
        raise NotFoundError("Task Not Found")
    return task


def _update_values(payload: TaskUpdate) -> dict:
    values = {}
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None and field not in _NULLABLE_UPDATE_FIELDS:
            continue
        values[field] = value
    if "check_lists" in values and not values["check_lists"]:
        raise ValidationError("PLease fill at least one check list")
    return values


def update_task(db: Session, identity: Identity, task_id: str, payload: TaskUpdate) -> Task:
    """Update a task the caller created or is assigned to.

    The ownership condition is applied inside the UPDATE itself.
    """
    values = _update_values(payload)
    scope = db.query(Task).filter(Task.id == task_id, _visible_to(identity))

    if values:
        try:
            matched = scope.update(values, synchronize_session=False)
        except StatementError as exc:
            db.rollback()
            if isinstance(exc.orig, LookupError):
                raise ValidationError(str(exc.orig))
            raise
        if not matched:
            db.rollback()
            raise NotFoundError("Task Not Found")
        _commit(db)
        task = db.get(Task, task_id, populate_existing=True)
    else:
        task = scope.first()

    if task is None:
        raise NotFoundError("Task Not Found")

    logger.info("User %s updated task %s", identity.id, task_id)
    return task


def delete_task(db: Session, identity: Identity, task_id: str) -> None:
    """Delete a task; only its creator may."""
    if not task_id:
        raise InvalidTaskIdError()

    deleted = (
        db.query(Task)
        .filter(Task.id == task_id, Task.created_by == identity.id)
        .delete(synchronize_session="fetch")
    )
    if not deleted:
        db.rollback()
        raise NotFoundError("Task Not Found")
    db.commit()

    logger.info("User %s deleted task %s", identity.id, task_id)
