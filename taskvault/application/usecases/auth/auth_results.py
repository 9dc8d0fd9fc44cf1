"""
===============================================================================
AUTH USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Business Goal:
    Resultados tipados de registro y login.

Notas:
    - INVALID_CREDENTIALS es uno solo para "email desconocido" y "password
      incorrecto": el cliente no puede distinguirlos.
    - CONFLICT solo aparece en registro (unicidad username/email).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ....identity.users import User


class AuthErrorCode(str, Enum):
    CONFLICT = "CONFLICT"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"


@dataclass(frozen=True)
class AuthError:
    code: AuthErrorCode
    message: str


@dataclass
class AuthResult:
    """
    Resultado de registro/login.

    Contrato:
      - error is None => user presente (y token en login)
      - error != None => user y token son None
    """

    user: User | None = None
    token: str | None = None
    expires_in: int | None = None
    error: AuthError | None = None


USER_CONFLICT = AuthError(
    code=AuthErrorCode.CONFLICT, message="Username or email already in use."
)
INVALID_CREDENTIALS = AuthError(
    code=AuthErrorCode.INVALID_CREDENTIALS, message="Invalid email or password."
)
