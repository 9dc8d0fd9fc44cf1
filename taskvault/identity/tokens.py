"""
===============================================================================
TARJETA CRC — identity/tokens.py
===============================================================================

Módulo:
    Identity Token Service (JWT HS256)

Responsabilidades:
    - Emitir tokens firmados con claims mínimos: sub (user_id) + exp.
    - Verificar firma y expiración, devolviendo una Identity confiable.
    - Clasificar fallas (TokenErrorKind) SOLO para logging interno.

Colaboradores:
    - PyJWT (encode/decode)
    - crosscutting.config.get_settings: secreto y TTL.
    - identity.users.Identity

Decisiones de diseño:
    - Stateless: el token no se guarda en el servidor y no se puede revocar
      antes de exp (limitación documentada).
    - Sin datos personales en el token: ni email ni username.
    - Verificación pura: no toca storage, no tiene side effects.
    - No loguear tokens ni secretos.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from uuid import UUID

import jwt

from ..crosscutting.config import get_settings
from .users import Identity

JWT_ALGORITHM: str = "HS256"

CLAIM_SUB: str = "sub"
CLAIM_EXP: str = "exp"

# El token transporta exactamente estos claims.
_ALLOWED_CLAIMS: frozenset[str] = frozenset({CLAIM_SUB, CLAIM_EXP})


class TokenErrorKind(str, Enum):
    """Motivo interno de rechazo (nunca se expone al cliente)."""

    MISSING = "missing"
    MALFORMED = "malformed"
    EXPIRED = "expired"
    BAD_SIGNATURE = "bad_signature"


class TokenError(Exception):
    """Token ausente o inválido. `kind` distingue la causa para logs."""

    def __init__(self, kind: TokenErrorKind):
        self.kind = kind
        super().__init__(f"token rejected: {kind.value}")


@dataclass(frozen=True, slots=True)
class TokenSettings:
    """Settings de tokens (snapshot)."""

    jwt_secret: str
    jwt_access_ttl_minutes: int


@dataclass(frozen=True, slots=True)
class IssuedToken:
    token: str
    expires_in: int


def get_token_settings() -> TokenSettings:
    """Construye un snapshot de settings de tokens."""
    s = get_settings()
    return TokenSettings(
        jwt_secret=s.jwt_secret,
        jwt_access_ttl_minutes=s.jwt_access_ttl_minutes,
    )


def issue_token(user_id: UUID, settings: TokenSettings | None = None) -> IssuedToken:
    """Emite un token para `user_id` con expiración fija desde ahora."""
    token_settings = settings or get_token_settings()

    now = datetime.now(timezone.utc)
    expires_in = int(token_settings.jwt_access_ttl_minutes * 60)

    payload: dict[str, object] = {
        CLAIM_SUB: str(user_id),
        CLAIM_EXP: int((now + timedelta(seconds=expires_in)).timestamp()),
    }

    token = jwt.encode(payload, token_settings.jwt_secret, algorithm=JWT_ALGORITHM)
    return IssuedToken(token=token, expires_in=expires_in)


def verify_token(token: str, settings: TokenSettings | None = None) -> Identity:
    """
    Verifica firma + expiración y devuelve la Identity embebida.

    Errores:
        TokenError(EXPIRED | BAD_SIGNATURE | MALFORMED)
    """
    token_settings = settings or get_token_settings()

    try:
        payload = jwt.decode(
            token,
            token_settings.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": [CLAIM_SUB, CLAIM_EXP]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenError(TokenErrorKind.EXPIRED) from exc
    except jwt.InvalidSignatureError as exc:
        raise TokenError(TokenErrorKind.BAD_SIGNATURE) from exc
    except jwt.InvalidTokenError as exc:
        raise TokenError(TokenErrorKind.MALFORMED) from exc

    if set(payload) - _ALLOWED_CLAIMS:
        raise TokenError(TokenErrorKind.MALFORMED)

    try:
        user_id = UUID(str(payload[CLAIM_SUB]))
    except ValueError as exc:
        raise TokenError(TokenErrorKind.MALFORMED) from exc

    return Identity(user_id=user_id)
