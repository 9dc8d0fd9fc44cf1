"""
Repositorios concretos.

- postgres/: implementación productiva (psycopg 3 + psycopg_pool)
- in_memory/: misma semántica, para tests y desarrollo local
"""

from .in_memory import InMemoryTaskRepository, InMemoryUserRepository
from .postgres import PostgresTaskRepository, PostgresUserRepository

__all__ = [
    "InMemoryTaskRepository",
    "InMemoryUserRepository",
    "PostgresTaskRepository",
    "PostgresUserRepository",
]
