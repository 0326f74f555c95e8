# app/services/user_service.py
import logging
from typing import Any, List

from app.repositories.base import UserRepository
from app.schemas import UserRequest, UserCreate, UserUpdate, UserOut
from app.services.task_service import check_id, parse_request, lookup_id
from app.utils.errors import NotFoundError, StorageError

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, users: UserRepository):
        self.users = users

    def create_user(self, data: Any) -> int:
        req = parse_request(UserRequest, data)
        user_id = self._call(
            "insert user", self.users.create_user,
            UserCreate(username=req.username, password=req.password),
        )
        logger.info("User created id=%s", user_id)
        return user_id

    def get_user(self, user_id: Any) -> UserOut:
        user_id = check_id(user_id, "user")
        return self._call("get user", self.users.get_user, user_id)

    def get_all_users(self) -> List[UserOut]:
        return self._call("get all users", self.users.get_all_users)

    def update_user(self, user_id: Any, data: Any) -> None:
        user_id = check_id(user_id, "user")
        req = parse_request(UserRequest, data)
        self._call(
            "update user", self.users.update_user,
            UserUpdate(id=user_id, username=req.username, password=req.password),
        )
        logger.info("User updated id=%s", user_id)

    def delete_user(self, user_id: Any) -> None:
        """Delete the user; its tasks keep pointing at the removed id"""
        user_id = check_id(user_id, "user")
        self._call("delete user", self.users.delete_user, user_id)
        logger.info("User deleted id=%s", user_id)

    def user_exists(self, user_id: Any) -> bool:
        user_id = lookup_id(user_id, "user")
        if user_id is None:
            return False
        return self._call("check user", self.users.check_user_exists, user_id)

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
