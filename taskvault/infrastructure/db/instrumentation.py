"""
===============================================================================
CRC CARD — infrastructure/db/instrumentation.py
===============================================================================

Componente:
  InstrumentedConnectionPool (Facade/Proxy sobre psycopg_pool)

Responsabilidades:
  - Loguear queries lentas (umbral DB_SLOW_QUERY_SECONDS).
  - Validar la conexión al adquirirla (rollback + SELECT 1).
  - Traducir fallas de adquisición a DatabaseConnectionError.

Colaboradores:
  - infrastructure/db/pool.py
  - crosscutting/logger.py
===============================================================================
"""

from __future__ import annotations

import os
import time
from typing import Any, ContextManager

from ...crosscutting.logger import logger
from .errors import DatabaseConnectionError


def _statement_kind(sql: Any) -> str:
    """Extrae un “tipo” de statement para logs (baja cardinalidad)."""
    parts = str(sql).lstrip().split(None, 1)
    return parts[0].upper() if parts else "UNKNOWN"


class TimedConnection:
    """
    Proxy de conexión: intercepta execute para medir tiempo.

    Delegamos TODO al conn real con __getattr__; solo envolvemos execute().
    """

    def __init__(self, inner_conn, *, slow_query_seconds: float) -> None:
        self._conn = inner_conn
        self._slow = slow_query_seconds

    def execute(self, sql, *args, **kwargs):
        start = time.perf_counter()
        try:
            return self._conn.execute(sql, *args, **kwargs)
        finally:
            elapsed = time.perf_counter() - start
            if elapsed >= self._slow:
                logger.warning(
                    "DB query lenta",
                    extra={"kind": _statement_kind(sql), "seconds": round(elapsed, 4)},
                )

    def __getattr__(self, item: str):
        return getattr(self._conn, item)


class _ConnectionContext(ContextManager[TimedConnection]):
    """Context manager que envuelve el context manager del pool."""

    def __init__(
        self, inner_ctx, *, slow_query_seconds: float, healthcheck: bool
    ) -> None:
        self._inner_ctx = inner_ctx
        self._slow = slow_query_seconds
        self._healthcheck = healthcheck

    def __enter__(self) -> TimedConnection:
        try:
            conn = self._inner_ctx.__enter__()
        except Exception as exc:
            raise DatabaseConnectionError("No se pudo adquirir conexión DB.") from exc

        if self._healthcheck:
            try:
                # Estado limpio + conexión viva (evita conexiones zombis).
                conn.rollback()
                conn.execute("SELECT 1")
            except Exception as exc:
                self._inner_ctx.__exit__(type(exc), exc, exc.__traceback__)
                raise DatabaseConnectionError("No se pudo validar conexión DB.") from exc

        return TimedConnection(conn, slow_query_seconds=self._slow)

    def __exit__(self, exc_type, exc, tb) -> bool:
        return self._inner_ctx.__exit__(exc_type, exc, tb)


class InstrumentedConnectionPool:
    """
    Facade del pool real.

    Los repositorios siguen haciendo `with pool.connection() as conn:`,
    pero `conn` es un TimedConnection.
    """

    def __init__(self, inner_pool) -> None:
        self._pool = inner_pool
        self._slow_seconds = float(os.getenv("DB_SLOW_QUERY_SECONDS", "0.25"))
        self._healthcheck = os.getenv("DB_HEALTHCHECK_ON_ACQUIRE", "true").lower() in {
            "1",
            "true",
            "yes",
        }

    def connection(self, *args, **kwargs) -> ContextManager[TimedConnection]:
        inner_ctx = self._pool.connection(*args, **kwargs)
        return _ConnectionContext(
            inner_ctx,
            slow_query_seconds=self._slow_seconds,
            healthcheck=self._healthcheck,
        )

    def __getattr__(self, item: str):
        return getattr(self._pool, item)
