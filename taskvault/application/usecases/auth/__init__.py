"""Casos de uso de autenticación (registro / login)."""

from __future__ import annotations

from .auth_results import (
    INVALID_CREDENTIALS,
    USER_CONFLICT,
    AuthError,
    AuthErrorCode,
    AuthResult,
)
from .login_user import LoginUserInput, LoginUserUseCase
from .register_user import RegisterUserInput, RegisterUserUseCase

__all__ = [
    "AuthError",
    "AuthErrorCode",
    "AuthResult",
    "INVALID_CREDENTIALS",
    "LoginUserInput",
    "LoginUserUseCase",
    "RegisterUserInput",
    "RegisterUserUseCase",
    "USER_CONFLICT",
]
