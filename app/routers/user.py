# app/routers/user.py
from fastapi import APIRouter, Depends

from app.schemas import UserRequest
from app.services.user_service import UserService
from app.utils.dependencies import get_user_service, http_error
from app.utils.errors import ServiceError

router = APIRouter()

@router.post("/users")
def create_user(req: UserRequest, service: UserService = Depends(get_user_service)):
    try:
        user_id = service.create_user(req)
    except ServiceError as e:
        raise http_error(e) from e
    return {"status": "success", "data": {"user_id": user_id}}

@router.get("/users")
def get_all_users(service: UserService = Depends(get_user_service)):
    try:
        users = service.get_all_users()
    except ServiceError as e:
        raise http_error(e) from e
    return {"status": "success", "data": users}

@router.get("/user/{user_id}")
def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    try:
        user = service.get_user(user_id)
    except ServiceError as e:
        raise http_error(e) from e
    return {"status": "success", "data": user}

@router.put("/user/{user_id}")
def update_user(user_id: int, req: UserRequest, service: UserService = Depends(get_user_service)):
    try:
        service.update_user(user_id, req)
    except ServiceError as e:
        raise http_error(e) from e
    return {"status": "success", "data": {"user_id": user_id}}

@router.delete("/user/{user_id}")
def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    """Delete a user; tasks that reference it are kept"""
    try:
        service.delete_user(user_id)
    except ServiceError as e:
        raise http_error(e) from e
    return {"status": "success"}
