import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config.settings import Settings, load_settings
from app.repositories import create_repositories
from app.repositories.base import TaskRepository, UserRepository
from app.routers import task, user
from app.services.task_service import TaskService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(
    settings: Optional[Settings] = None,
    tasks: Optional[TaskRepository] = None,
    users: Optional[UserRepository] = None,
) -> FastAPI:
    """Build the API around a ready store.

    The store is constructed here, before the app exists, so a bad database
    configuration fails at startup instead of on the first request.
    Passing `tasks` (and optionally `users`) skips store construction.
    """
    if settings is None:
        settings = load_settings()
    configure_logging(settings.log_level)

    if tasks is None:
        tasks, users = create_repositories(settings)

    app = FastAPI(title="Task Manager API")
    app.state.task_service = TaskService(tasks, users)
    app.state.user_service = UserService(users) if users is not None else None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Accept", "Authorization", "Content-Type", "X-CSRF-Token", "X-Request-ID"],
        expose_headers=["Link"],
        max_age=300,
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Malformed bodies and non-numeric ids are client errors, not 422s
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_errors(exc)},
        )

    # Route registration
    app.include_router(task.router, prefix="/v1", tags=["Tasks"])
    if users is not None:
        app.include_router(user.router, prefix="/v1", tags=["Users"])

    @app.on_event("shutdown")
    def shutdown_event():
        logger.info("Shutting down Task Manager API...")
        tasks.close()

    @app.get("/")
    def read_root():
        return {"message": "Task Manager API"}

    @app.get("/health")
    def health():
        return {"status": "ok", "backend": settings.storage_backend}

    logger.info("Task Manager API ready backend=%s", settings.storage_backend)
    return app


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": [str(p) for p in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
