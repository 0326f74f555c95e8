# app/repositories/base.py
"""
Storage contracts shared by the SQL and in-memory backends.

Every method is synchronous and may block on I/O or on a lock. Lookups and
writes addressed by id raise NotFoundError when the row is absent; any other
backend failure surfaces as StorageError. Existence checks never raise for
absence, they return False.
"""

from abc import ABC, abstractmethod
from typing import List

from app.schemas import TaskCreate, TaskUpdate, TaskOut, UserCreate, UserUpdate, UserOut


class TaskRepository(ABC):

    @abstractmethod
    def create_task(self, task: TaskCreate) -> int:
        """Persist a new task with status "new" and return its id"""

    @abstractmethod
    def get_task(self, task_id: int) -> TaskOut:
        ...

    @abstractmethod
    def get_all_tasks(self) -> List[TaskOut]:
        ...

    @abstractmethod
    def update_task(self, task: TaskUpdate) -> None:
        """Overwrite title, description and status of an existing task"""

    @abstractmethod
    def delete_task(self, task_id: int) -> None:
        ...

    @abstractmethod
    def check_task_exists(self, task_id: int) -> bool:
        ...

    def close(self) -> None:
        return


class UserRepository(ABC):

    @abstractmethod
    def create_user(self, user: UserCreate) -> int:
        ...

    @abstractmethod
    def get_user(self, user_id: int) -> UserOut:
        ...

    @abstractmethod
    def get_all_users(self) -> List[UserOut]:
        ...

    @abstractmethod
    def update_user(self, user: UserUpdate) -> None:
        ...

    @abstractmethod
    def delete_user(self, user_id: int) -> None:
        """Remove the user; tasks that reference it are left untouched"""

    @abstractmethod
    def check_user_exists(self, user_id: int) -> bool:
        ...

    @abstractmethod
    def get_all_tasks_from_user(self, username: str) -> List[TaskOut]:
        """Tasks owned by the user with this username; empty if none or unknown"""
