"""
===============================================================================
USE CASE: Login User
===============================================================================

Business Goal:
    Verificar credenciales y emitir un token de identidad.

Why (Context / Intención):
    - Email desconocido y password incorrecto producen el MISMO error.
    - Con email desconocido igual se verifica contra DUMMY_HASH, así el
      tiempo de respuesta no revela si la cuenta existe.

CRC:
    Class: LoginUserUseCase
    Collaborators:
        - UserRepository.get_user_by_email
        - identity.credentials: verify_password, DUMMY_HASH
        - identity.tokens.issue_token
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from ....identity.credentials import DUMMY_HASH, verify_password
from ....identity.tokens import TokenSettings, issue_token
from .auth_results import INVALID_CREDENTIALS, AuthResult


@dataclass(frozen=True)
class LoginUserInput:
    email: str
    password: str


class LoginUserUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        token_settings: TokenSettings | None = None,
    ) -> None:
        self._users = user_repository
        self._token_settings = token_settings

    def execute(self, input_data: LoginUserInput) -> AuthResult:
        user = self._users.get_user_by_email(input_data.email)

        if user is None:
            verify_password(input_data.password, DUMMY_HASH)
            logger.info("Login fallido", extra={"reason": "unknown_email"})
            return AuthResult(error=INVALID_CREDENTIALS)

        if not verify_password(input_data.password, user.password_hash):
            logger.info(
                "Login fallido",
                extra={"reason": "bad_password", "user_id": str(user.id)},
            )
            return AuthResult(error=INVALID_CREDENTIALS)

        issued = issue_token(user.id, settings=self._token_settings)
        logger.info("Login exitoso", extra={"user_id": str(user.id)})
        return AuthResult(user=user, token=issued.token, expires_in=issued.expires_in)
