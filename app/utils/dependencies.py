# app/utils/dependencies.py
from fastapi import HTTPException, Request, status

from app.services.task_service import TaskService
from app.services.user_service import UserService
from app.utils.errors import NotFoundError, ServiceError, StorageError, ValidationError


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


def get_user_service(request: Request) -> UserService:
    service = getattr(request.app.state, "user_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_501_NOT_IMPLEMENTED,
            detail="User storage is not available with this backend",
        )
    return service


def http_error(e: ServiceError) -> HTTPException:
    """Map a data layer failure onto the response the client sees"""
    if isinstance(e, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if isinstance(e, NotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{e.entity.capitalize()} not found",
        )
    if isinstance(e, StorageError):
        # Backend details stay in the server log
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
