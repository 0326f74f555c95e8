# tests/test_task_service.py
import pytest

from app.services.task_service import TaskService
from app.utils.errors import NotFoundError, StorageError, ValidationError


class FailingUsers:
    """User store whose existence check always fails"""

    def check_user_exists(self, user_id):
        raise StorageError("check", "user", "connection refused")


def test_create_task_for_existing_user(task_service, user_service):
    user_id = user_service.create_user({"username": "alice", "password": "pw"})

    task_id = task_service.create_task({"user_id": user_id, "title": "write report"})

    task = task_service.get_task(task_id)
    assert task.status == "new"
    assert task.title == "write report"
    assert task.description == ""


def test_create_task_for_missing_user_is_not_found_and_writes_nothing(task_service):
    before = len(task_service.get_all_tasks())

    with pytest.raises(NotFoundError) as excinfo:
        task_service.create_task({"user_id": 12, "title": "orphan"})

    assert excinfo.value.entity == "user"
    assert len(task_service.get_all_tasks()) == before


@pytest.mark.parametrize("payload", [
    {"user_id": 1, "title": ""},
    {"user_id": 1, "title": "   "},
    {"user_id": 1},
    {"title": "no owner"},
    {"user_id": "abc", "title": "t"},
])
def test_create_task_rejects_bad_input(task_service, payload):
    with pytest.raises(ValidationError):
        task_service.create_task(payload)


def test_user_check_failure_is_storage_error(memory_repo):
    service = TaskService(memory_repo, FailingUsers())

    with pytest.raises(StorageError):
        service.create_task({"user_id": 1, "title": "t"})
    assert memory_repo.count() == 0


@pytest.mark.parametrize("task_id", [1, 2, 999])
def test_never_created_ids_are_not_found(task_service, task_id):
    with pytest.raises(NotFoundError):
        task_service.get_task(task_id)
    with pytest.raises(NotFoundError):
        task_service.update_task(task_id, {"title": "t", "status": "done"})
    with pytest.raises(NotFoundError):
        task_service.delete_task(task_id)


@pytest.mark.parametrize("task_id", ["7", None, True, 1.0])
def test_non_integer_ids_are_validation_errors(task_service, task_id):
    with pytest.raises(ValidationError):
        task_service.get_task(task_id)


@pytest.mark.parametrize("task_id", [0, -3, 2**31, 2**63, 10**30])
def test_ids_that_cannot_exist_are_not_found(task_service, task_id):
    with pytest.raises(NotFoundError) as excinfo:
        task_service.get_task(task_id)
    assert excinfo.value.entity_id == task_id
    with pytest.raises(NotFoundError):
        task_service.update_task(task_id, {"title": "t", "status": "done"})
    with pytest.raises(NotFoundError):
        task_service.delete_task(task_id)
    assert task_service.task_exists(task_id) is False


@pytest.mark.parametrize("user_id", [0, -1, 2**31, 2**63])
def test_create_task_with_impossible_user_id_is_not_found(task_service, user_id):
    with pytest.raises(NotFoundError) as excinfo:
        task_service.create_task({"user_id": user_id, "title": "orphan"})

    assert excinfo.value.entity == "user"
    assert task_service.get_all_tasks() == []


def test_update_requires_title(task_service, user_service):
    user_id = user_service.create_user({"username": "alice", "password": "pw"})
    task_id = task_service.create_task({"user_id": user_id, "title": "t"})

    with pytest.raises(ValidationError):
        task_service.update_task(task_id, {"title": "", "status": "done"})
    assert task_service.get_task(task_id).status == "new"


def test_update_accepts_any_status(task_service, user_service):
    user_id = user_service.create_user({"username": "alice", "password": "pw"})
    task_id = task_service.create_task({"user_id": user_id, "title": "t"})

    task_service.update_task(task_id, {"title": "t", "status": "blocked-on-review"})
    assert task_service.get_task(task_id).status == "blocked-on-review"


def test_delete_twice(task_service, user_service):
    user_id = user_service.create_user({"username": "alice", "password": "pw"})
    task_id = task_service.create_task({"user_id": user_id, "title": "t"})

    task_service.delete_task(task_id)
    with pytest.raises(NotFoundError):
        task_service.delete_task(task_id)
    assert task_service.task_exists(task_id) is False


def test_tasks_from_user_requires_username(task_service):
    with pytest.raises(ValidationError):
        task_service.get_all_tasks_from_user("")
    with pytest.raises(ValidationError):
        task_service.get_all_tasks_from_user(None)


def test_memory_backend_skips_user_check(memory_repo):
    service = TaskService(memory_repo)

    task_id = service.create_task({"user_id": 404, "title": "no users here"})
    assert service.get_task(task_id).user_id == 404

    with pytest.raises(StorageError):
        service.get_all_tasks_from_user("alice")
