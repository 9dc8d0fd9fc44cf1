"""
Name: In-Memory Repository Tests

Responsibilities:
  - Ownership predicate on every task operation
  - Ordering newest first, NULL description on omission
  - Username/email uniqueness emulation
"""

import pytest

from taskvault.crosscutting.exceptions import UserAlreadyExistsError
from taskvault.domain.task_update import TaskUpdate

pytestmark = pytest.mark.unit


def test_create_then_list_round_trip(task_repository, alice):
    task_repository.create_task(alice, title="X")

    tasks = task_repository.list_tasks(alice)

    assert len(tasks) == 1
    assert tasks[0].title == "X"
    assert tasks[0].completed is False
    assert tasks[0].description is None
    assert tasks[0].user_id == alice.user_id


def test_list_is_newest_first(task_repository, alice):
    first = task_repository.create_task(alice, title="first")
    second = task_repository.create_task(alice, title="second")

    assert [t.id for t in task_repository.list_tasks(alice)] == [second.id, first.id]


def test_list_empty_for_new_owner(task_repository, alice):
    assert task_repository.list_tasks(alice) == []


def test_other_owner_cannot_see_update_or_delete(task_repository, alice, bob):
    task = task_repository.create_task(alice, title="private")

    assert task_repository.list_tasks(bob) == []
    assert task_repository.update_task(bob, task.id, TaskUpdate(completed=True)) is None
    assert task_repository.delete_task(bob, task.id) is None

    untouched = task_repository.list_tasks(alice)[0]
    assert untouched.completed is False


def test_missing_and_foreign_ids_look_the_same(task_repository, alice, bob):
    task = task_repository.create_task(alice, title="private")

    assert task_repository.update_task(bob, task.id, TaskUpdate(title="x")) is None
    assert task_repository.update_task(bob, 9999, TaskUpdate(title="x")) is None


def test_update_applies_changes(task_repository, alice):
    task = task_repository.create_task(alice, title="a", description="b")

    updated = task_repository.update_task(
        alice, task.id, TaskUpdate(title="c", completed=True)
    )

    assert updated.title == "c"
    assert updated.description == "b"
    assert updated.completed is True


def test_update_rejects_empty_changes(task_repository, alice):
    task = task_repository.create_task(alice, title="a")

    with pytest.raises(ValueError):
        task_repository.update_task(alice, task.id, TaskUpdate())


def test_delete_is_idempotent_in_effect(task_repository, alice):
    task = task_repository.create_task(alice, title="a")

    assert task_repository.delete_task(alice, task.id) == task.id
    assert task_repository.delete_task(alice, task.id) is None


def test_user_uniqueness(user_repository):
    user_repository.create_user(username="alice123", email="a@x.com", password_hash="h")

    with pytest.raises(UserAlreadyExistsError):
        user_repository.create_user(
            username="alice123", email="other@x.com", password_hash="h"
        )
    with pytest.raises(UserAlreadyExistsError):
        user_repository.create_user(
            username="other", email="a@x.com", password_hash="h"
        )


def test_user_lookups(user_repository):
    user = user_repository.create_user(
        username="alice123", email="a@x.com", password_hash="h"
    )

    assert user_repository.get_user_by_email("a@x.com") == user
    assert user_repository.find_user_by_username_or_email("alice123", "zz@x.com") == user
    assert user_repository.get_user_by_email("nobody@x.com") is None
