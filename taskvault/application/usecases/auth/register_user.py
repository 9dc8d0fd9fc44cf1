"""
===============================================================================
USE CASE: Register User
===============================================================================

Business Goal:
    Crear una cuenta con username/email únicos y password hasheado.

Why (Context / Intención):
    - El pre-chequeo de duplicados da un 409 rápido en el caso común.
    - La unicidad real la garantiza la DB: si dos registros compiten, el
      segundo recibe UserAlreadyExistsError y también termina en CONFLICT.

CRC:
    Class: RegisterUserUseCase
    Collaborators:
        - UserRepository
        - identity.credentials.hash_password
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.exceptions import UserAlreadyExistsError
from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from ....identity.credentials import hash_password
from .auth_results import USER_CONFLICT, AuthResult


@dataclass(frozen=True)
class RegisterUserInput:
    username: str
    email: str
    password: str


class RegisterUserUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, input_data: RegisterUserInput) -> AuthResult:
        existing = self._users.find_user_by_username_or_email(
            input_data.username, input_data.email
        )
        if existing is not None:
            return AuthResult(error=USER_CONFLICT)

        password_hash = hash_password(input_data.password)
        try:
            user = self._users.create_user(
                username=input_data.username,
                email=input_data.email,
                password_hash=password_hash,
            )
        except UserAlreadyExistsError:
            return AuthResult(error=USER_CONFLICT)

        logger.info("Usuario registrado", extra={"user_id": str(user.id)})
        return AuthResult(user=user)
