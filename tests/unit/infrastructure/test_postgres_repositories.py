"""
Name: PostgreSQL Repository Tests (mocked pool)

Responsibilities:
  - Every task statement carries the ownership predicate and owner param
  - Zero rows map to None; driver failures map to DatabaseError
  - UniqueViolation on users maps to UserAlreadyExistsError
"""

import logging
from datetime import datetime, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from psycopg import errors as pg_errors

from taskvault.crosscutting.exceptions import DatabaseError, UserAlreadyExistsError
from taskvault.domain.task_update import TaskUpdate
from taskvault.identity.users import Identity
from taskvault.infrastructure.repositories import (
    PostgresTaskRepository,
    PostgresUserRepository,
)

pytestmark = pytest.mark.unit

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _pool_with(conn: MagicMock) -> MagicMock:
    pool = MagicMock()
    pool.connection.return_value.__enter__.return_value = conn
    return pool


def _sql(call) -> str:
    return " ".join(call.args[0].split())


def test_list_filters_by_owner_and_orders_newest_first():
    owner = Identity(user_id=uuid4())
    conn = MagicMock()
    conn.execute.return_value.fetchall.return_value = [
        (2, owner.user_id, "b", None, False, NOW),
        (1, owner.user_id, "a", "desc", True, NOW),
    ]
    repo = PostgresTaskRepository(pool=_pool_with(conn))

    tasks = repo.list_tasks(owner)

    call = conn.execute.call_args
    assert "WHERE user_id = %s" in _sql(call)
    assert "ORDER BY created_at DESC, id DESC" in _sql(call)
    assert call.args[1] == (owner.user_id,)
    assert [t.id for t in tasks] == [2, 1]
    assert tasks[1].completed is True


def test_create_passes_owner_and_null_description():
    owner = Identity(user_id=uuid4())
    conn = MagicMock()
    conn.execute.return_value.fetchone.return_value = (
        5, owner.user_id, "buy milk", None, False, NOW,
    )
    repo = PostgresTaskRepository(pool=_pool_with(conn))

    task = repo.create_task(owner, title="buy milk")

    assert conn.execute.call_args.args[1] == (owner.user_id, "buy milk", None)
    assert task.id == 5
    assert task.description is None


def test_update_zero_rows_is_none():
    owner = Identity(user_id=uuid4())
    conn = MagicMock()
    conn.execute.return_value.fetchone.return_value = None
    repo = PostgresTaskRepository(pool=_pool_with(conn))

    assert repo.update_task(owner, 3, TaskUpdate(completed=True)) is None

    call = conn.execute.call_args
    assert _sql(call).endswith("WHERE user_id = %s AND id = %s RETURNING id, user_id, title, description, completed, created_at")
    assert call.args[1] == (True, owner.user_id, 3)


def test_delete_uses_ownership_predicate():
    owner = Identity(user_id=uuid4())
    conn = MagicMock()
    conn.execute.return_value.fetchone.return_value = (9,)
    repo = PostgresTaskRepository(pool=_pool_with(conn))

    assert repo.delete_task(owner, 9) == 9

    call = conn.execute.call_args
    assert "DELETE FROM tasks WHERE user_id = %s AND id = %s RETURNING id" in _sql(call)
    assert call.args[1] == (owner.user_id, 9)


def test_driver_failure_becomes_database_error():
    conn = MagicMock()
    conn.execute.side_effect = RuntimeError("connection reset")
    repo = PostgresTaskRepository(pool=_pool_with(conn))

    with pytest.raises(DatabaseError):
        repo.list_tasks(Identity(user_id=uuid4()))


def test_create_user_unique_violation():
    conn = MagicMock()
    conn.execute.side_effect = pg_errors.UniqueViolation("duplicate key")
    repo = PostgresUserRepository(pool=_pool_with(conn))

    with pytest.raises(UserAlreadyExistsError):
        repo.create_user(username="alice123", email="a@x.com", password_hash="h")


def test_get_user_by_email_maps_row():
    user_id = uuid4()
    conn = MagicMock()
    conn.execute.return_value.fetchone.return_value = (
        user_id, "alice123", "a@x.com", "hash", NOW,
    )
    repo = PostgresUserRepository(pool=_pool_with(conn))

    user = repo.get_user_by_email("a@x.com")

    assert user.id == user_id
    assert user.username == "alice123"
    assert conn.execute.call_args.args[1] == ("a@x.com",)


def test_user_lookup_failure_logs_no_email(caplog):
    conn = MagicMock()
    conn.execute.side_effect = RuntimeError("connection reset")
    repo = PostgresUserRepository(pool=_pool_with(conn))

    with caplog.at_level(logging.ERROR, logger="taskvault"):
        with pytest.raises(DatabaseError):
            repo.find_user_by_username_or_email("alice123", "a@x.com")

    assert caplog.records
    for record in caplog.records:
        assert not hasattr(record, "email")
        assert not hasattr(record, "username")
        assert "a@x.com" not in record.getMessage()
