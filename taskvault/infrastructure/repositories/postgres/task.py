"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/task.py
============================================================
Class: PostgresTaskRepository

Responsibilities:
- Implementar el Task Ownership Store sobre PostgreSQL (SQL crudo, psycopg 3).
- Incluir el predicado de ownership (user_id = %s) en TODA sentencia
  SELECT/UPDATE/DELETE: nunca check-then-act.
- Compilar updates parciales desde un TaskUpdate tipado (solo las columnas
  provistas), agregando el predicado de ownership siempre al final.
- Mapear filas -> entidad Task y exponer fallos vía DatabaseError.

Collaborators:
- domain.entities.Task, domain.task_update.TaskUpdate
- identity.users.Identity
- crosscutting.exceptions.DatabaseError
- crosscutting.logger.logger
- psycopg_pool.ConnectionPool (una conexión por operación)

Constraints / Notes:
- "No existe" y "existe pero es de otro" devuelven lo mismo (None).
- Queries siempre parametrizadas; los nombres de columna salen de
  TaskUpdate.COLUMNS (código), nunca del input.
- Orden determinístico: created_at DESC, id DESC.
============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import Task
from ....domain.task_update import TaskUpdate
from ....identity.users import Identity

_TASK_COLUMNS = "id, user_id, title, description, completed, created_at"
_TASK_ORDER_BY = "created_at DESC, id DESC"
_OWNERSHIP_PREDICATE = "user_id = %s AND id = %s"


def build_update_statement(
    owner: Identity, task_id: int, changes: TaskUpdate
) -> tuple[str, tuple[object, ...]]:
    """
    Compila un TaskUpdate a (sql, params).

    - SET con las columnas provistas, en el orden de TaskUpdate.COLUMNS.
    - WHERE user_id = %s AND id = %s, siempre último (params: owner, task_id).
    - Un TaskUpdate vacío no compila (ValueError): la validación ya lo rechazó.
    """
    assignments = changes.assignments()
    if not assignments:
        raise ValueError("TaskUpdate without fields cannot be compiled")

    allowed = set(TaskUpdate.COLUMNS)
    set_parts: list[str] = []
    params: list[object] = []
    for column, value in assignments:
        if column not in allowed:
            raise ValueError(f"Unknown task column: {column}")
        set_parts.append(f"{column} = %s")
        params.append(value)

    params.append(owner.user_id)
    params.append(task_id)

    query = f"""
        UPDATE tasks
        SET {", ".join(set_parts)}
        WHERE {_OWNERSHIP_PREDICATE}
        RETURNING {_TASK_COLUMNS}
    """
    return query, tuple(params)


class PostgresTaskRepository:
    """R: Implementación PostgreSQL del repositorio de tareas (owner-scoped)."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        # R: Pool inyectable para tests; en producción se obtiene por factory global.
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    # =========================================================
    # Mapping
    # =========================================================
    @staticmethod
    def _row_to_task(row: tuple) -> Task:
        task_id, user_id, title, description, completed, created_at = row
        return Task(
            id=task_id,
            user_id=user_id,
            title=title,
            description=description,
            completed=bool(completed),
            created_at=created_at,
        )

    # =========================================================
    # Helpers de ejecución (DRY + errores consistentes)
    # =========================================================
    def _fetchall(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> list[tuple]:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc

    def _fetchone(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc

    # =========================================================
    # API del repositorio
    # =========================================================
    def list_tasks(self, owner: Identity) -> list[Task]:
        rows = self._fetchall(
            query=f"""
                SELECT {_TASK_COLUMNS}
                FROM tasks
                WHERE user_id = %s
                ORDER BY {_TASK_ORDER_BY}
            """,
            params=(owner.user_id,),
            context_msg="PostgresTaskRepository: list_tasks failed",
            extra={"user_id": str(owner.user_id)},
        )
        return [self._row_to_task(r) for r in rows]

    def create_task(
        self,
        owner: Identity,
        *,
        title: str,
        description: Optional[str] = None,
    ) -> Task:
        row = self._fetchone(
            query=f"""
                INSERT INTO tasks (user_id, title, description)
                VALUES (%s, %s, %s)
                RETURNING {_TASK_COLUMNS}
            """,
            params=(owner.user_id, title, description),
            context_msg="PostgresTaskRepository: create_task failed",
            extra={"user_id": str(owner.user_id)},
        )
        if not row:
            raise DatabaseError("PostgresTaskRepository: create_task returned no row")
        return self._row_to_task(row)

    def update_task(
        self, owner: Identity, task_id: int, changes: TaskUpdate
    ) -> Optional[Task]:
        query, params = build_update_statement(owner, task_id, changes)
        row = self._fetchone(
            query=query,
            params=params,
            context_msg="PostgresTaskRepository: update_task failed",
            extra={
                "user_id": str(owner.user_id),
                "task_id": task_id,
                "columns": [c for c, _ in changes.assignments()],
            },
        )
        return self._row_to_task(row) if row else None

    def delete_task(self, owner: Identity, task_id: int) -> Optional[int]:
        row = self._fetchone(
            query=f"""
                DELETE FROM tasks
                WHERE {_OWNERSHIP_PREDICATE}
                RETURNING id
            """,
            params=(owner.user_id, task_id),
            context_msg="PostgresTaskRepository: delete_task failed",
            extra={"user_id": str(owner.user_id), "task_id": task_id},
        )
        return int(row[0]) if row else None

    def ping(self) -> bool:
        """Chequeo trivial de conectividad."""
        self._fetchone(
            query="SELECT 1",
            params=(),
            context_msg="PostgresTaskRepository: ping failed",
            extra={},
        )
        return True
