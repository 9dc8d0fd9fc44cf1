"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/auth.py
===============================================================================

Responsabilidades:
  - POST /auth/register: alta de usuario (201 | 400 | 409).
  - POST /auth/login: credenciales -> token (200 | 400 | 401).
  - El 401 de login tiene el mismo body para email desconocido y password
    incorrecto.

Colaboradores:
  - application.usecases.auth (Register/Login)
  - interfaces.api.http.validation + schemas.auth
  - crosscutting.error_responses (conflict / unauthorized)
===============================================================================
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, status

from taskvault.application.usecases.auth import (
    AuthErrorCode,
    LoginUserInput,
    LoginUserUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
)
from taskvault.container import get_login_user_use_case, get_register_user_use_case
from taskvault.crosscutting.error_responses import (
    INVALID_CREDENTIALS_MESSAGE,
    conflict,
    internal_error,
    unauthorized,
)

from ..schemas.auth import (
    LoginRequest,
    LoginRes,
    LoginUserRes,
    RegisteredUserRes,
    RegisterRequest,
    RegisterRes,
)
from ..validation import read_json_body, validate_payload

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterRes,
    status_code=status.HTTP_201_CREATED,
)
def register(
    raw_body: Any = Depends(read_json_body),
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    req = validate_payload(RegisterRequest, raw_body)

    result = use_case.execute(
        RegisterUserInput(username=req.username, email=req.email, password=req.password)
    )
    if result.error is not None:
        if result.error.code == AuthErrorCode.CONFLICT:
            raise conflict(result.error.message)
        raise internal_error()

    return RegisterRes(user=RegisteredUserRes.from_user(result.user))


@router.post("/login", response_model=LoginRes)
def login(
    raw_body: Any = Depends(read_json_body),
    use_case: LoginUserUseCase = Depends(get_login_user_use_case),
):
    req = validate_payload(LoginRequest, raw_body)

    result = use_case.execute(LoginUserInput(email=req.email, password=req.password))
    if result.error is not None:
        if result.error.code == AuthErrorCode.INVALID_CREDENTIALS:
            raise unauthorized(INVALID_CREDENTIALS_MESSAGE)
        raise internal_error()

    user = result.user
    return LoginRes(
        token=result.token,
        user=LoginUserRes(id=user.id, username=user.username, email=user.email),
    )
