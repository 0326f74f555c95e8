from typing import Optional, Tuple

from app.config.settings import Settings
from app.database import Database
from app.repositories.base import TaskRepository, UserRepository
from app.repositories.memory import MemoryTaskRepository
from app.repositories.sql import SqlRepository


def create_repositories(settings: Settings) -> Tuple[TaskRepository, Optional[UserRepository]]:
    """Build the configured backend; the memory backend has no user store"""
    if settings.storage_backend == "memory":
        return MemoryTaskRepository(), None

    database = Database.from_settings(settings.database)
    database.create_all()
    repository = SqlRepository(database)
    return repository, repository
