"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Almacenar usuarios en memoria (tests / desarrollo local).
  - Emular los constraints de unicidad (username, email) de Postgres.

Collaborators:
  - identity.users.User
  - domain.repositories.UserRepository
  - crosscutting.exceptions.UserAlreadyExistsError
============================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Optional
from uuid import UUID, uuid4

from ....crosscutting.exceptions import UserAlreadyExistsError
from ....domain.repositories import UserRepository
from ....identity.users import User


class InMemoryUserRepository(UserRepository):
    """Repositorio in-memory, thread-safe, para usuarios."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, User] = {}

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self._users.values() if u.email == email), None)

    def find_user_by_username_or_email(
        self, username: str, email: str
    ) -> Optional[User]:
        with self._lock:
            return next(
                (
                    u
                    for u in self._users.values()
                    if u.username == username or u.email == email
                ),
                None,
            )

    def create_user(self, *, username: str, email: str, password_hash: str) -> User:
        with self._lock:
            for existing in self._users.values():
                if existing.username == username or existing.email == email:
                    raise UserAlreadyExistsError("Username or email already in use.")

            user = User(
                id=uuid4(),
                username=username,
                email=email,
                password_hash=password_hash,
                created_at=datetime.now(timezone.utc),
            )
            self._users[user.id] = user
        return user
