# app/repositories/sql.py
import logging
from contextlib import contextmanager
from typing import Iterator, List

from sqlalchemy import delete, exists, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import MAX_ID, Database
from app.models import Task, User, TASK_STATUS_NEW
from app.repositories.base import TaskRepository, UserRepository
from app.schemas import TaskCreate, TaskUpdate, TaskOut, UserCreate, UserUpdate, UserOut
from app.utils.errors import NotFoundError, ServiceError, StorageError

logger = logging.getLogger(__name__)


def _storable(row_id: int) -> bool:
    # Ids outside the column range cannot match a row and would overflow the driver
    return 1 <= row_id <= MAX_ID


class SqlRepository(TaskRepository, UserRepository):
    """
    Tasks and users on a relational backend.

    Each operation runs in its own short transaction. Writes addressed by id
    check the affected row count and raise NotFoundError when nothing matched,
    so callers do not need a separate existence check before writing.
    """

    def __init__(self, database: Database):
        self.db = database

    @contextmanager
    def _transaction(self, operation: str, entity: str) -> Iterator[Session]:
        session = self.db.session()
        try:
            yield session
            session.commit()
        except ServiceError:
            session.rollback()
            raise
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(operation, entity, str(e)) from e
        finally:
            session.close()

    def close(self) -> None:
        self.db.close()

    # ---- tasks ----

    def create_task(self, task: TaskCreate) -> int:
        if not _storable(task.user_id):
            raise NotFoundError("user", task.user_id)
        with self._transaction("insert", "task") as session:
            # Shared row lock on the owner: a concurrent delete of this user
            # waits until the insert has committed.
            owner = session.execute(
                select(User.id).where(User.id == task.user_id).with_for_update(read=True)
            ).scalar_one_or_none()
            if owner is None:
                raise NotFoundError("user", task.user_id)

            db_task = Task(
                user_id=task.user_id,
                title=task.title,
                description=task.description,
                status=TASK_STATUS_NEW,
            )
            session.add(db_task)
            session.flush()
            task_id = db_task.id
        logger.debug("Inserted task id=%s user_id=%s", task_id, task.user_id)
        return task_id

    def get_task(self, task_id: int) -> TaskOut:
        if not _storable(task_id):
            raise NotFoundError("task", task_id)
        with self._transaction("get", "task") as session:
            db_task = session.get(Task, task_id)
            if db_task is None:
                raise NotFoundError("task", task_id)
            return TaskOut.model_validate(db_task)

    def get_all_tasks(self) -> List[TaskOut]:
        with self._transaction("get all", "tasks") as session:
            rows = session.execute(select(Task).order_by(Task.id)).scalars().all()
            return [TaskOut.model_validate(row) for row in rows]

    def update_task(self, task: TaskUpdate) -> None:
        if not _storable(task.id):
            raise NotFoundError("task", task.id)
        with self._transaction("update", "task") as session:
            result = session.execute(
                update(Task)
                .where(Task.id == task.id)
                .values(title=task.title, description=task.description, status=task.status)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError("task", task.id)
        logger.debug("Updated task id=%s status=%s", task.id, task.status)

    def delete_task(self, task_id: int) -> None:
        if not _storable(task_id):
            raise NotFoundError("task", task_id)
        with self._transaction("delete", "task") as session:
            result = session.execute(
                delete(Task)
                .where(Task.id == task_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError("task", task_id)
        logger.debug("Deleted task id=%s", task_id)

    def check_task_exists(self, task_id: int) -> bool:
        if not _storable(task_id):
            return False
        with self._transaction("check", "task") as session:
            return bool(session.execute(select(exists().where(Task.id == task_id))).scalar())

    def get_all_tasks_from_user(self, username: str) -> List[TaskOut]:
        with self._transaction("get all from user", "tasks") as session:
            rows = session.execute(
                select(Task)
                .join(User, User.id == Task.user_id)
                .where(User.username == username)
                .order_by(Task.id)
            ).scalars().all()
            return [TaskOut.model_validate(row) for row in rows]

    # ---- users ----

    def create_user(self, user: UserCreate) -> int:
        with self._transaction("insert", "user") as session:
            db_user = User(username=user.username, password=user.password)
            session.add(db_user)
            session.flush()
            user_id = db_user.id
        logger.debug("Inserted user id=%s", user_id)
        return user_id

    def get_user(self, user_id: int) -> UserOut:
        if not _storable(user_id):
            raise NotFoundError("user", user_id)
        with self._transaction("get", "user") as session:
            db_user = session.get(User, user_id)
            if db_user is None:
                raise NotFoundError("user", user_id)
            return UserOut.model_validate(db_user)

    def get_all_users(self) -> List[UserOut]:
        with self._transaction("get all", "users") as session:
            rows = session.execute(select(User).order_by(User.id)).scalars().all()
            return [UserOut.model_validate(row) for row in rows]

    def update_user(self, user: UserUpdate) -> None:
        if not _storable(user.id):
            raise NotFoundError("user", user.id)
        with self._transaction("update", "user") as session:
            result = session.execute(
                update(User)
                .where(User.id == user.id)
                .values(username=user.username, password=user.password)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError("user", user.id)
        logger.debug("Updated user id=%s", user.id)

    def delete_user(self, user_id: int) -> None:
        if not _storable(user_id):
            raise NotFoundError("user", user_id)
        with self._transaction("delete", "user") as session:
            result = session.execute(
                delete(User)
                .where(User.id == user_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError("user", user_id)
        logger.debug("Deleted user id=%s", user_id)

    def check_user_exists(self, user_id: int) -> bool:
        if not _storable(user_id):
            return False
        with self._transaction("check", "user") as session:
            return bool(session.execute(select(exists().where(User.id == user_id))).scalar())
