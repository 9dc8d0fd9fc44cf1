"""
Name: TaskUpdate + Update Statement Tests

Responsibilities:
  - TaskUpdate keeps only supplied fields, in a stable order
  - build_update_statement writes only those columns and always ends with
    the ownership predicate
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from taskvault.domain.entities import Task
from taskvault.domain.task_update import UNSET, TaskUpdate
from taskvault.identity.users import Identity
from taskvault.infrastructure.repositories.postgres import build_update_statement

pytestmark = pytest.mark.unit


def _sql(query: str) -> str:
    return " ".join(query.split())


def test_empty_update():
    changes = TaskUpdate()

    assert changes.is_empty()
    assert changes.assignments() == []
    assert not UNSET


def test_assignments_follow_column_order_not_call_order():
    changes = TaskUpdate(completed=True, title="x")

    assert changes.assignments() == [("title", "x"), ("completed", True)]


def test_false_is_a_real_value():
    changes = TaskUpdate(completed=False)

    assert not changes.is_empty()
    assert changes.assignments() == [("completed", False)]


def test_apply_to_replaces_only_supplied_fields():
    task = Task(
        id=1,
        user_id=uuid4(),
        title="buy milk",
        description="2 liters",
        completed=False,
        created_at=datetime.now(timezone.utc),
    )

    updated = TaskUpdate(completed=True).apply_to(task)

    assert updated.completed is True
    assert updated.title == "buy milk"
    assert updated.description == "2 liters"
    assert task.completed is False


def test_statement_sets_only_supplied_columns():
    owner = Identity(user_id=uuid4())

    query, params = build_update_statement(owner, 7, TaskUpdate(completed=True))

    sql = _sql(query)
    assert "SET completed = %s WHERE" in sql
    assert "title" not in sql.split("WHERE")[0]
    assert params == (True, owner.user_id, 7)


def test_statement_always_ends_with_ownership_predicate():
    owner = Identity(user_id=uuid4())
    changes = TaskUpdate(title="a", description="b", completed=False)

    query, params = build_update_statement(owner, 42, changes)

    sql = _sql(query)
    assert "SET title = %s, description = %s, completed = %s" in sql
    assert "WHERE user_id = %s AND id = %s RETURNING" in sql
    assert params[-2:] == (owner.user_id, 42)
    assert params[:3] == ("a", "b", False)


def test_empty_update_cannot_be_compiled():
    with pytest.raises(ValueError):
        build_update_statement(Identity(user_id=uuid4()), 1, TaskUpdate())
