"""Repositorios PostgreSQL."""

from .task import PostgresTaskRepository, build_update_statement
from .user import PostgresUserRepository

__all__ = ["PostgresTaskRepository", "PostgresUserRepository", "build_update_statement"]
