"""
===============================================================================
TARJETA CRC — identity/access_guard.py
===============================================================================

Módulo:
    Access Guard (Authorization: Bearer <token> -> Identity)

Responsabilidades:
    - Extraer el token del header Authorization (forma estricta).
    - Verificarlo con el Token Service.
    - Exponer la dependencia FastAPI require_identity().

Máquina de estados por request:
    sin header                    -> 401
    header con forma incorrecta   -> 401
    forma correcta + verify falla -> 401
    verify OK                     -> Identity adjunta, el request sigue

Colaboradores:
    - identity.tokens: verify_token, TokenError
    - crosscutting.error_responses.unauthorized
    - crosscutting.logger

Reglas:
    - Nunca lee el body ni consulta storage.
    - El cliente recibe siempre el mismo 401; el motivo solo va al log.
    - Los handlers de tareas confían en la Identity que devuelve esta
      dependencia y la pasan tal cual a los repositorios.
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from fastapi import Header, Request

from ..crosscutting.error_responses import unauthorized
from ..crosscutting.logger import logger
from .tokens import TokenError, TokenErrorKind, TokenSettings, verify_token
from .users import Identity

BEARER_SCHEME: str = "Bearer"


def extract_bearer_token(authorization: str | None) -> str:
    """Extrae token desde `Authorization: Bearer <token>` (sin tolerancias)."""
    if not authorization:
        raise TokenError(TokenErrorKind.MISSING)

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME or not parts[1]:
        raise TokenError(TokenErrorKind.MALFORMED)

    return parts[1]


def authenticate(
    authorization: str | None, settings: TokenSettings | None = None
) -> Identity:
    """Header crudo -> Identity verificada (o TokenError)."""
    token = extract_bearer_token(authorization)
    return verify_token(token, settings=settings)


def require_identity() -> Callable:
    """Dependency FastAPI: requiere un token válido y devuelve la Identity."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> Identity:
        try:
            identity = authenticate(authorization)
        except TokenError as exc:
            logger.info("Token rechazado", extra={"reason": exc.kind.value})
            raise unauthorized() from exc

        request.state.identity = identity
        return identity

    return dependency
