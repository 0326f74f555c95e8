# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from app.config.settings import DatabaseSettings, Settings
from app.database import Database
from app.repositories.memory import MemoryTaskRepository
from app.repositories.sql import SqlRepository
from app.services.task_service import TaskService
from app.services.user_service import UserService
from main import create_app


@pytest.fixture()
def database():
    """Fresh in-memory SQLite database with both tables created"""
    db = Database.from_settings(DatabaseSettings(url="sqlite://"))
    db.create_all()
    yield db
    db.close()


@pytest.fixture()
def sql_repo(database) -> SqlRepository:
    return SqlRepository(database)


@pytest.fixture()
def memory_repo() -> MemoryTaskRepository:
    return MemoryTaskRepository()


@pytest.fixture()
def task_service(sql_repo) -> TaskService:
    return TaskService(sql_repo, sql_repo)


@pytest.fixture()
def user_service(sql_repo) -> UserService:
    return UserService(sql_repo)


@pytest.fixture()
def client(sql_repo) -> TestClient:
    app = create_app(Settings(storage_backend="sql", log_level="WARNING"), sql_repo, sql_repo)
    return TestClient(app)


@pytest.fixture()
def memory_client(memory_repo) -> TestClient:
    app = create_app(Settings(storage_backend="memory", log_level="WARNING"), memory_repo)
    return TestClient(app)
