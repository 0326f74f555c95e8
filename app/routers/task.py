# app/routers/task.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional

from app.schemas import TaskRequest, TaskUpdateRequest
from app.services.task_service import TaskService
from app.utils.dependencies import get_task_service, http_error
from app.utils.errors import ServiceError

router = APIRouter()

@router.post("/tasks")
def create_task(req: TaskRequest, service: TaskService = Depends(get_task_service)):
    """Create a task owned by an existing user"""
    try:
        task_id = service.create_task(req)
    except ServiceError as e:
        raise http_error(e) from e
    return {"status": "success", "data": {"task_id": task_id}}

@router.get("/tasks")
def get_all_tasks(service: TaskService = Depends(get_task_service)):
    try:
        tasks = service.get_all_tasks()
    except ServiceError as e:
        raise http_error(e) from e
    return {"status": "success", "data": tasks}

@router.get("/tasks/user")
def get_all_tasks_from_user(
    username: Optional[str] = Query(default=None),
    service: TaskService = Depends(get_task_service)
):
    """Tasks of the user with the given username (empty list if none)"""
    if service.users is None:
        raise HTTPException(
            status_code=status.HTTP_501_NOT_IMPLEMENTED,
            detail="User storage is not available with this backend",
        )
    try:
        tasks = service.get_all_tasks_from_user(username)
    except ServiceError as e:
        raise http_error(e) from e
    return {"status": "success", "data": tasks}

@router.get("/task/{task_id}")
def get_task(task_id: int, service: TaskService = Depends(get_task_service)):
    try:
        task = service.get_task(task_id)
    except ServiceError as e:
        raise http_error(e) from e
    return {"status": "success", "data": task}

@router.put("/task/{task_id}")
def update_task(
    task_id: int,
    req: TaskUpdateRequest,
    service: TaskService = Depends(get_task_service)
):
    """Overwrite title, description and status"""
    try:
        service.update_task(task_id, req)
    except ServiceError as e:
        raise http_error(e) from e
    return {"status": "success", "data": {"task_id": task_id}}

@router.delete("/task/{task_id}")
def delete_task(task_id: int, service: TaskService = Depends(get_task_service)):
    try:
        service.delete_task(task_id)
    except ServiceError as e:
        raise http_error(e) from e
    return {"status": "success"}
