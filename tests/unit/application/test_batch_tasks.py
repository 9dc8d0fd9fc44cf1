"""
Name: Batch Task Service Tests

Responsibilities:
  - Batches are NOT atomic: each id is applied independently
  - Partial success is reported per id (succeeded / not_found / failed)
"""

import pytest

from taskvault.application.usecases.tasks import BatchTaskService
from taskvault.crosscutting.exceptions import DatabaseError
from taskvault.domain.task_update import TaskUpdate

pytestmark = pytest.mark.unit


class _FailingOnce:
    """Wraps a repository and fails the write for one task id."""

    def __init__(self, inner, failing_id: int):
        self._inner = inner
        self._failing_id = failing_id

    def list_tasks(self, owner):
        return self._inner.list_tasks(owner)

    def update_task(self, owner, task_id, changes):
        if task_id == self._failing_id:
            raise DatabaseError("statement timeout")
        return self._inner.update_task(owner, task_id, changes)

    def delete_task(self, owner, task_id):
        if task_id == self._failing_id:
            raise DatabaseError("statement timeout")
        return self._inner.delete_task(owner, task_id)


def test_complete_all_reports_per_id(task_repository, alice, bob):
    a1 = task_repository.create_task(alice, title="a1")
    a2 = task_repository.create_task(alice, title="a2")
    foreign = task_repository.create_task(bob, title="b1")

    outcome = BatchTaskService(task_repository).complete_all(
        alice, [a1.id, foreign.id, a2.id, 999]
    )

    assert outcome.succeeded == [a1.id, a2.id]
    assert outcome.not_found == [foreign.id, 999]
    assert outcome.failed == []
    assert all(t.completed for t in task_repository.list_tasks(alice))
    assert task_repository.list_tasks(bob)[0].completed is False


def test_complete_all_keeps_going_after_a_failure(task_repository, alice):
    a1 = task_repository.create_task(alice, title="a1")
    a2 = task_repository.create_task(alice, title="a2")
    a3 = task_repository.create_task(alice, title="a3")

    service = BatchTaskService(_FailingOnce(task_repository, failing_id=a2.id))
    outcome = service.complete_all(alice, [a1.id, a2.id, a3.id])

    assert outcome.succeeded == [a1.id, a3.id]
    assert outcome.failed == [a2.id]
    assert outcome.is_partial
    assert outcome.total == 3

    # R: no rollback of the rows that already succeeded
    by_id = {t.id: t for t in task_repository.list_tasks(alice)}
    assert by_id[a1.id].completed is True
    assert by_id[a2.id].completed is False
    assert by_id[a3.id].completed is True


def test_clear_completed_deletes_only_completed(task_repository, alice):
    done = task_repository.create_task(alice, title="done")
    todo = task_repository.create_task(alice, title="todo")
    task_repository.update_task(alice, done.id, TaskUpdate(completed=True))

    outcome = BatchTaskService(task_repository).clear_completed(alice)

    assert outcome.succeeded == [done.id]
    assert [t.id for t in task_repository.list_tasks(alice)] == [todo.id]


def test_clear_completed_partial_failure(task_repository, alice):
    first = task_repository.create_task(alice, title="first")
    second = task_repository.create_task(alice, title="second")
    for task in (first, second):
        task_repository.update_task(alice, task.id, TaskUpdate(completed=True))

    service = BatchTaskService(_FailingOnce(task_repository, failing_id=first.id))
    outcome = service.clear_completed(alice)

    assert outcome.succeeded == [second.id]
    assert outcome.failed == [first.id]
    assert [t.id for t in task_repository.list_tasks(alice)] == [first.id]
