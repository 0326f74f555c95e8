# app/services/task_service.py
"""
Access checks in front of the task store.

Turns the store's results into one of three outcomes: a value, NotFoundError,
or StorageError. Input shape is checked before any store call, and the
owning user is confirmed present before a task is created.
"""

import logging
from typing import Any, List, Optional, Type, TypeVar

import pydantic

from app.database import MAX_ID
from app.repositories.base import TaskRepository, UserRepository
from app.schemas import TaskRequest, TaskUpdateRequest, TaskCreate, TaskUpdate, TaskOut
from app.utils.errors import NotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def parse_request(model: Type[ModelT], data: Any) -> ModelT:
    """Coerce a dict (or an already-built model) into a request record"""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}"
            for err in e.errors()
        )
        raise ValidationError(problems) from e


def _require_int(value: Any, entity: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{entity} id must be an integer")
    return value


def id_in_range(value: int) -> bool:
    """Whether a row with this id could exist at all"""
    return 1 <= value <= MAX_ID


def check_id(value: Any, entity: str) -> int:
    """Return the id, or raise NotFoundError if no row can carry it"""
    value = _require_int(value, entity)
    if not id_in_range(value):
        logger.warning("%s not found id=%s", entity.capitalize(), value)
        raise NotFoundError(entity, value)
    return value


def lookup_id(value: Any, entity: str) -> Optional[int]:
    """Like check_id, but None for an id that cannot exist"""
    value = _require_int(value, entity)
    return value if id_in_range(value) else None


class TaskService:
    def __init__(self, tasks: TaskRepository, users: Optional[UserRepository] = None):
        self.tasks = tasks
        # None with the in-memory backend: user_id cannot be verified there
        self.users = users

    def create_task(self, data: Any) -> int:
        req = parse_request(TaskRequest, data)

        if self.users is not None:
            exists = False
            if id_in_range(req.user_id):
                try:
                    exists = self.users.check_user_exists(req.user_id)
                except StorageError:
                    logger.exception("Failed to check user id=%s", req.user_id)
                    raise
            if not exists:
                logger.warning("User not found id=%s", req.user_id)
                raise NotFoundError("user", req.user_id)

        task = TaskCreate(user_id=req.user_id, title=req.title, description=req.description)
        task_id = self._call("insert task", self.tasks.create_task, task)
        logger.info("Task created id=%s user_id=%s", task_id, req.user_id)
        return task_id

    def get_task(self, task_id: Any) -> TaskOut:
        task_id = check_id(task_id, "task")
        return self._call("get task", self.tasks.get_task, task_id)

    def get_all_tasks(self) -> List[TaskOut]:
        return self._call("get all tasks", self.tasks.get_all_tasks)

    def get_all_tasks_from_user(self, username: Optional[str]) -> List[TaskOut]:
        if not username or not username.strip():
            raise ValidationError("username is required")
        if self.users is None:
            raise StorageError("get all from user", "tasks", "backend has no user store")
        return self._call("get tasks from user", self.users.get_all_tasks_from_user, username)

    def update_task(self, task_id: Any, data: Any) -> None:
        task_id = check_id(task_id, "task")
        req = parse_request(TaskUpdateRequest, data)
        if not req.title.strip():
            raise ValidationError("title is required")

        update = TaskUpdate(
            id=task_id, title=req.title, description=req.description, status=req.status
        )
        self._call("update task", self.tasks.update_task, update)
        logger.info("Task updated id=%s status=%s", task_id, req.status)

    def delete_task(self, task_id: Any) -> None:
        task_id = check_id(task_id, "task")
        self._call("delete task", self.tasks.delete_task, task_id)
        logger.info("Task deleted id=%s", task_id)

    def task_exists(self, task_id: Any) -> bool:
        task_id = lookup_id(task_id, "task")
        if task_id is None:
            return False
        return self._call("check task", self.tasks.check_task_exists, task_id)

    @staticmethod
    def _call(what: str, fn, *args):
        try:
            return fn(*args)
        except NotFoundError as e:
            logger.warning("%s: %s", what, e)
            raise
        except StorageError:
            logger.exception("Failed to %s", what)
            raise
