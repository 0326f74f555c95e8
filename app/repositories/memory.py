# app/repositories/memory.py
import logging
from datetime import datetime, timezone
from typing import Dict, List

from app.models.task import TASK_STATUS_NEW
from app.repositories.base import TaskRepository
from app.schemas import TaskCreate, TaskUpdate, TaskOut
from app.utils.errors import NotFoundError, ValidationError
from app.utils.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)


class MemoryTaskRepository(TaskRepository):
    """Process-local task store without a users table.

    The map and the id counter share one reader/writer lock. Every write
    holds the lock exclusively from the existence check to the final
    assignment, so a check can never be invalidated by a concurrent delete.
    user_id is stored as given; there is nothing to check it against.
    """

    def __init__(self):
        self._tasks: Dict[int, TaskOut] = {}
        self._next_id = 1
        self._lock = ReadWriteLock()
        logger.info("MemoryTaskRepository ready")

    def create_task(self, task: TaskCreate) -> int:
        with self._lock.write():
            task_id = self._next_id
            self._next_id += 1
            self._tasks[task_id] = TaskOut(
                id=task_id,
                user_id=task.user_id,
                title=task.title,
                description=task.description,
                status=TASK_STATUS_NEW,
                created_at=datetime.now(timezone.utc),
            )
        logger.debug("Created task id=%s", task_id)
        return task_id

    def get_task(self, task_id: int) -> TaskOut:
        with self._lock.read():
            task = self._tasks.get(task_id)
            if task is None:
                raise NotFoundError("task", task_id)
            return task.model_copy()

    def get_all_tasks(self) -> List[TaskOut]:
        with self._lock.read():
            return [self._tasks[k].model_copy() for k in sorted(self._tasks)]

    def update_task(self, task: TaskUpdate) -> None:
        with self._lock.write():
            current = self._tasks.get(task.id)
            if current is None:
                raise NotFoundError("task", task.id)
            if not task.title.strip():
                raise ValidationError("title is required")
            self._tasks[task.id] = current.model_copy(
                update={
                    "title": task.title,
                    "description": task.description,
                    "status": task.status,
                }
            )
        logger.debug("Updated task id=%s status=%s", task.id, task.status)

    def delete_task(self, task_id: int) -> None:
        with self._lock.write():
            if self._tasks.pop(task_id, None) is None:
                raise NotFoundError("task", task_id)
        logger.debug("Deleted task id=%s", task_id)

    def check_task_exists(self, task_id: int) -> bool:
        with self._lock.read():
            return task_id in self._tasks

    def count(self) -> int:
        with self._lock.read():
            return len(self._tasks)
