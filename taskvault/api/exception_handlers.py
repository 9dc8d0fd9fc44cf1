"""
===============================================================================
TARJETA CRC — taskvault/api/exception_handlers.py (Error Normalizer)
===============================================================================

Responsabilidades:
  - Traducir excepciones a respuestas RFC7807 con un catálogo cerrado
    (400 / 401 / 404 / 405 / 409 / 500).
  - Loguear errores inesperados con detalle completo (stack + error_id).
  - Reducir todo error inesperado al mismo 500 genérico: ni el mensaje ni el
    tipo de la excepción llegan al cliente, en ningún entorno.

Patrones aplicados:
  - Exception Mapping (Presentation Layer).
  - Fail-safe: cualquier excepción no tipada -> INTERNAL_ERROR.

Colaboradores:
  - crosscutting.error_responses: problem_response, handlers base
  - crosscutting.exceptions: TaskVaultError y derivadas
  - interfaces.api.http.validation.PayloadValidationError
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..crosscutting.error_responses import (
    INTERNAL_ERROR_MESSAGE,
    VALIDATION_FAILED_MESSAGE,
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    http_exception_handler,
    problem_response,
)
from ..crosscutting.exceptions import TaskVaultError
from ..crosscutting.logger import logger
from ..interfaces.api.http.validation import FORM_FIELD, PayloadValidationError

# Prefijos de `loc` que FastAPI agrega y que no son nombres de campo.
_LOC_SOURCES = {"body", "path", "query", "header", "cookie"}


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


async def payload_validation_handler(
    request: Request, exc: PayloadValidationError
) -> JSONResponse:
    return problem_response(
        request,
        status_code=400,
        code=ErrorCode.VALIDATION_ERROR,
        detail=VALIDATION_FAILED_MESSAGE,
        errors=exc.errors,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Errores de parámetros declarados en la firma (no incluye bodies de tasks)."""
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in _LOC_SOURCES]
        field = ".".join(loc) if loc else FORM_FIELD
        errors.append({"field": field, "message": "Invalid value."})

    return problem_response(
        request,
        status_code=400,
        code=ErrorCode.VALIDATION_ERROR,
        detail=VALIDATION_FAILED_MESSAGE,
        errors=errors,
    )


def _log_internal_error(request: Request, exc: Exception, error_id: str) -> None:
    logger.error(
        "Error interno",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={
            "error_id": error_id,
            "error_type": type(exc).__name__,
            "request_id": _request_id_from(request),
        },
    )


def _generic_internal_error(request: Request) -> JSONResponse:
    return problem_response(
        request,
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=INTERNAL_ERROR_MESSAGE,
    )


async def taskvault_error_handler(request: Request, exc: TaskVaultError) -> JSONResponse:
    _log_internal_error(request, exc, exc.error_id)
    return _generic_internal_error(request)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler de último recurso.

    - Log completo (stacktrace) con error_id para correlación.
    - Respuesta genérica fija.
    """
    _log_internal_error(request, exc, str(uuid4()))
    return _generic_internal_error(request)


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Importante:
      - AppHTTPException antes que la HTTPException de Starlette (MRO).
      - Exception genérica se registra al final como fallback.
    """
    app.add_exception_handler(PayloadValidationError, payload_validation_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(TaskVaultError, taskvault_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
