"""
===============================================================================
TARJETA CRC — schemas/auth.py
===============================================================================

Módulo:
    Schemas HTTP para registro / login

Responsabilidades:
    - Normalizar username (trim) y email (trim + lowercase).
    - Validar formato de email y largos mínimos de username/password.
    - Definir responses sin password_hash.
===============================================================================
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import ClassVar, Dict, Tuple
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskvault.identity.users import User

# Forma mínima local@dominio.tld, sin espacios.
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
INVALID_EMAIL_MESSAGE = "Please provide a valid email address."


def _normalize_email(value: str) -> str:
    email = value.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValueError(INVALID_EMAIL_MESSAGE)
    return email


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    FIELD_MESSAGES: ClassVar[Dict[Tuple[str, str], str]] = {
        ("username", "string_too_short"): "Username must be at least 3 characters.",
        ("email", "string_too_long"): INVALID_EMAIL_MESSAGE,
        ("password", "string_too_short"): "Password must be at least 8 characters.",
    }

    username: str = Field(..., min_length=3, max_length=50)
    email: str = Field(..., max_length=320)
    password: str = Field(..., min_length=8, max_length=512)

    # R: el trim del username corre antes de medir el largo.
    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    FIELD_MESSAGES: ClassVar[Dict[Tuple[str, str], str]] = {
        ("email", "missing"): INVALID_EMAIL_MESSAGE,
        ("password", "string_too_short"): "Password is required.",
    }

    email: str = Field(..., max_length=320)
    password: str = Field(..., min_length=1, max_length=512)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class RegisteredUserRes(BaseModel):
    id: UUID
    username: str
    email: str
    created_at: datetime | None = None

    @classmethod
    def from_user(cls, user: User) -> "RegisteredUserRes":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=user.created_at,
        )


class RegisterRes(BaseModel):
    user: RegisteredUserRes


class LoginUserRes(BaseModel):
    id: UUID
    username: str
    email: str


class LoginRes(BaseModel):
    token: str
    user: LoginUserRes
