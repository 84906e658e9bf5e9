from typing import List
from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session
from tasktracker.database import get_db
from tasktracker.routers.deps import get_auth
from tasktracker.schemas.task import TaskCreate, TaskOut
from tasktracker.services import tasks as task_service
from tasktracker.services.guard import AuthContext
from tasktracker.services.task_query import query_tasks

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("", response_model=TaskOut, status_code=201)
def create_task(task: TaskCreate, auth: AuthContext = Depends(get_auth), db: Session = Depends(get_db)):
    return task_service.create_task(db, auth.user, task)


@router.get("", response_model=List[TaskOut])
def list_tasks(request: Request, auth: AuthContext = Depends(get_auth), db: Session = Depends(get_db)):
    """Query params: completed=true|false, sortBy=field:asc|desc, limit, skip.

    Parsed leniently; see tasktracker.services.task_query.
    """
    return query_tasks(db, auth.user, request.query_params)


@router.get("/{task_id}", response_model=TaskOut)
def read_task(task_id: int, auth: AuthContext = Depends(get_auth), db: Session = Depends(get_db)):
    return task_service.resolve_task(db, auth.user, task_id)


@router.patch("/{task_id}", response_model=TaskOut)
def update_task(task_id: int, payload: dict = Body(...), auth: AuthContext = Depends(get_auth), db: Session = Depends(get_db)):
    return task_service.update_task(db, auth.user, task_id, payload)


@router.delete("/{task_id}", response_model=TaskOut)
def delete_task(task_id: int, auth: AuthContext = Depends(get_auth), db: Session = Depends(get_db)):
    return task_service.delete_task(db, auth.user, task_id)
