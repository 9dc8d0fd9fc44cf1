"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Cargar usuarios para autenticación (por email / por id).
  - Detectar colisiones de username/email antes de registrar.
  - Crear usuarios y traducir la violación de unicidad a UserAlreadyExistsError.
  - Mapear filas crudas -> entidad `User`.

Collaborators:
  - psycopg_pool.ConnectionPool (pool de conexiones)
  - infrastructure.db.pool.get_pool (accesor del pool global)
  - identity.users.User
  - crosscutting.exceptions.DatabaseError / UserAlreadyExistsError

Constraints / Notes:
  - Repositorio puro: la normalización (trim/lower) la hace la capa de validación.
  - Retorna None cuando no existe el recurso (no exception por “not found”).
  - SQL parametrizado siempre.
  - El chequeo previo de duplicados no alcanza ante carreras: el INSERT se
    apoya en los constraints uq_users_username / uq_users_email.
============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional
from uuid import uuid4

from psycopg import errors as pg_errors
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError, UserAlreadyExistsError
from ....crosscutting.logger import logger
from ....identity.users import User

# R: Lista explícita de columnas para mantener el contrato estable con migraciones.
_USER_COLUMNS = "id, username, email, password_hash, created_at"


class PostgresUserRepository:
    """R: Implementación PostgreSQL del repositorio de usuarios."""

    def __init__(self, pool: ConnectionPool | None = None) -> None:
        # Pool inyectable (para tests); si es None se usa el global.
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    @staticmethod
    def _row_to_user(row: tuple) -> User:
        return User(
            id=row[0],
            username=row[1],
            email=row[2],
            password_hash=row[3],
            created_at=row[4],
        )

    def _fetchone(
        self,
        *,
        query: str,
        params: Iterable[object],
        log_msg: str,
        log_extra: dict[str, object] | None = None,
    ) -> tuple | None:
        """Ejecuta una sentencia ... fetchone() con manejo consistente de errores."""
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            logger.exception(log_msg, extra={**(log_extra or {}), "error": str(exc)})
            raise DatabaseError(f"{log_msg}: {exc}") from exc

    # --- Lectura ---
    def get_user_by_email(self, email: str) -> Optional[User]:
        row = self._fetchone(
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE email = %s
            """,
            params=(email,),
            log_msg="PostgresUserRepository: get_user_by_email failed",
        )
        return self._row_to_user(row) if row else None

    def find_user_by_username_or_email(
        self, username: str, email: str
    ) -> Optional[User]:
        row = self._fetchone(
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE username = %s OR email = %s
                LIMIT 1
            """,
            params=(username, email),
            log_msg="PostgresUserRepository: find_user_by_username_or_email failed",
        )
        return self._row_to_user(row) if row else None

    # --- Escritura ---
    def create_user(self, *, username: str, email: str, password_hash: str) -> User:
        """
        Crea un usuario y devuelve el registro.

        - uq_users_username / uq_users_email -> UserAlreadyExistsError
        - cualquier otra falla -> DatabaseError
        """
        user_id = uuid4()
        log_extra = {"user_id": str(user_id)}

        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                row = conn.execute(
                    f"""
                        INSERT INTO users (id, username, email, password_hash)
                        VALUES (%s, %s, %s, %s)
                        RETURNING {_USER_COLUMNS}
                    """,
                    (user_id, username, email, password_hash),
                ).fetchone()
        except pg_errors.UniqueViolation as exc:
            logger.info("PostgresUserRepository: duplicate user", extra=log_extra)
            raise UserAlreadyExistsError("Username or email already in use.") from exc
        except Exception as exc:
            logger.exception(
                "PostgresUserRepository: create_user failed",
                extra={**log_extra, "error": str(exc)},
            )
            raise DatabaseError(f"PostgresUserRepository: create_user failed: {exc}") from exc

        if not row:
            raise DatabaseError(
                "PostgresUserRepository: create_user failed (no row returned)"
            )
        return self._row_to_user(row)
