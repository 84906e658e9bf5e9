"""Single-task operations, always scoped to the owner in the same query.

A task that belongs to someone else is reported exactly like one that does
not exist.
"""
from sqlalchemy.orm import Session
from tasktracker.errors import NotFoundError
from tasktracker.models.task import Task
from tasktracker.models.user import User
from tasktracker.schemas.task import TaskCreate, TaskUpdate
from tasktracker.services.updates import parse_update
from tasktracker.validation import id_in_range

TASK_UPDATE_FIELDS = frozenset({"description", "completed"})


def create_task(db: Session, owner: User, data: TaskCreate) -> Task:
    task = Task(description=data.description, completed=data.completed, owner_id=owner.id)
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def resolve_task(db: Session, owner: User, task_id: int) -> Task:
    if not id_in_range(task_id):
        raise NotFoundError("Task")
    task = db.query(Task).filter(Task.id == task_id, Task.owner_id == owner.id).first()
    if task is None:
        raise NotFoundError("Task")
    return task


def update_task(db: Session, owner: User, task_id: int, payload) -> Task:
    # reject bad fields before looking the task up, so nothing is touched
    changes = parse_update(TaskUpdate, payload, TASK_UPDATE_FIELDS)
    task = resolve_task(db, owner, task_id)
    for field, value in changes.items():
        setattr(task, field, value)
    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, owner: User, task_id: int) -> Task:
    task = resolve_task(db, owner, task_id)
    db.delete(task)
    db.commit()
    return task
