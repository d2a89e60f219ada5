from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.task import Assigner, Task as TaskSchema, TaskCreate, TaskUpdate, TaskWithAssigner
from ..security import Identity, get_current_identity
from ..services import tasks as task_service

router = APIRouter()


@router.post("/createTask")
def create_task(
    task: TaskCreate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Create a new task owned by the caller."""
    db_task = task_service.create_task(db, identity, task)
    return {
        "success": True,
        "message": "Task created successfully.",
        "data": {"task": TaskSchema.model_validate(db_task)},
    }


@router.get("/")
def get_tasks(
    range_days: Optional[str] = Query(default=None, alias="range"),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Tasks created by or assigned to the caller, created in the last ``range`` days."""
    rows = task_service.list_tasks(db, identity, task_service.parse_range(range_days))

    tasks = []
    for db_task, assigner in rows:
        data = TaskSchema.model_validate(db_task).model_dump()
        data["assigned_by"] = Assigner.model_validate(assigner) if assigner else None
        tasks.append(TaskWithAssigner.model_validate(data))

    return {"status": "success", "results": len(tasks), "data": {"tasks": tasks}}


@router.get("/{task_id}")
def get_task(task_id: str, db: Session = Depends(get_db)):
    """Get a task by id; no authentication required."""
    db_task = task_service.get_task(db, task_id)
    return {"success": True, "data": {"task": TaskSchema.model_validate(db_task)}}


@router.patch("/{task_id}")
def update_task(
    task_id: str,
    task_update: TaskUpdate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    db_task = task_service.update_task(db, identity, task_id, task_update)
    return {"status": "success", "data": {"task": TaskSchema.model_validate(db_task)}}


@router.delete("/{task_id}")
def delete_task(
    task_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    task_service.delete_task(db, identity, task_id)
    return {"success": True, "message": "Task deleted successfully"}
