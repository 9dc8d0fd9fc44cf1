# taskvault/crosscutting/error_responses.py
"""
===============================================================================
MÓDULO: Respuestas de error estándar (RFC 7807 / Problem Details)
===============================================================================

Objetivo
--------
Uniformar TODOS los errores HTTP para que:
- El cliente pueda manejar por "code"
- El backend pueda correlacionar por request_id
- Ninguna respuesta exponga stack traces, queries ni mensajes internos

Catálogo externo (estable):
  400 VALIDATION_ERROR  -> errors=[{"field", "message"}] (se reenvía tal cual)
  401 UNAUTHORIZED      -> mensaje sin motivo
  404 NOT_FOUND         -> mensaje del recurso (mismo para "no existe" y "no es tuyo")
  409 CONFLICT          -> solo unicidad en registro
  500 INTERNAL_ERROR    -> mensaje fijo

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  AppHTTPException + handlers

Responsabilidades:
  - Definir catálogo de códigos de error (ErrorCode)
  - Construir payload RFC7807 (ErrorDetail)
  - Proveer factories de errores frecuentes
  - Proveer handlers (FastAPI) para devolver JSON problem+json

Colaboradores:
  - crosscutting/middleware.py (request_id)
  - api/exception_handlers.py (mapea errores internos)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException


class ErrorCode(str, Enum):
    # 4xx
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    CONFLICT = "CONFLICT"

    # 5xx
    INTERNAL_ERROR = "INTERNAL_ERROR"


# Mensajes fijos del contrato externo.
VALIDATION_FAILED_MESSAGE = "Invalid input"
UNAUTHORIZED_MESSAGE = "Authentication required."
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred."


class ErrorDetail(BaseModel):
    """
    Modelo RFC 7807 (Problem Details).

    Campos extra:
    - code: error code estable para clientes
    - errors: lista de detalles por campo (ej: [{"field":"title","message":"..."}])
    - request_id: correlación con logs del servidor
    """

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None
    request_id: str | None = None


PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"

_OPENAPI_ERROR_CONTENT = {
    PROBLEM_JSON_MEDIA_TYPE: {"schema": {"$ref": "#/components/schemas/ErrorDetail"}}
}


def _openapi_error(description: str) -> dict[str, Any]:
    return {
        "description": f"{description} (RFC7807)",
        "model": ErrorDetail,
        "content": _OPENAPI_ERROR_CONTENT,
    }


OPENAPI_ERROR_RESPONSES = {
    "400": _openapi_error("Bad Request"),
    "401": _openapi_error("Unauthorized"),
    "404": _openapi_error("Not Found"),
    "409": _openapi_error("Conflict"),
    "default": _openapi_error("Error"),
}


class AppHTTPException(HTTPException):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AppHTTPException

    Responsabilidades:
      - Adjuntar un ErrorCode estable
      - Transportar errores de validación (errors[])
      - Permitir headers custom (WWW-Authenticate, etc.)

    Colaboradores:
      - app_exception_handler()
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.code = code
        self.errors = errors


# ---------------------------------------------------------------------------
# Factories de error (helpers)
# ---------------------------------------------------------------------------
def validation_error(errors: list[dict[str, Any]]) -> AppHTTPException:
    return AppHTTPException(
        400, ErrorCode.VALIDATION_ERROR, VALIDATION_FAILED_MESSAGE, list(errors)
    )


def unauthorized(detail: str = UNAUTHORIZED_MESSAGE) -> AppHTTPException:
    return AppHTTPException(
        401,
        ErrorCode.UNAUTHORIZED,
        detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def not_found(resource: str = "Resource") -> AppHTTPException:
    return AppHTTPException(404, ErrorCode.NOT_FOUND, f"{resource} not found.")


def conflict(detail: str) -> AppHTTPException:
    return AppHTTPException(409, ErrorCode.CONFLICT, detail)


def internal_error() -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)


# ---------------------------------------------------------------------------
# Construcción de respuestas
# ---------------------------------------------------------------------------
def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


def problem_response(
    request: Request,
    *,
    status_code: int,
    code: ErrorCode,
    detail: str,
    errors: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Arma la respuesta problem+json (única forma de error que sale del servicio)."""
    error = ErrorDetail(
        type=f"about:blank/{code.value.lower()}",
        title=code.value.replace("_", " ").title(),
        status=status_code,
        detail=detail,
        code=code,
        instance=str(request.url.path),
        errors=errors or None,
        request_id=_request_id_from(request),
    )
    return JSONResponse(
        status_code=status_code,
        content=error.model_dump(exclude_none=True),
        headers=headers,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )


# ---------------------------------------------------------------------------
# Handlers FastAPI
# ---------------------------------------------------------------------------
async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """Handler para AppHTTPException (propaga headers opcionales)."""
    return problem_response(
        request,
        status_code=exc.status_code,
        code=exc.code,
        detail=str(exc.detail),
        errors=exc.errors,
        headers=getattr(exc, "headers", None),
    )


_STATUS_TO_CODE = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.UNAUTHORIZED,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
    409: ErrorCode.CONFLICT,
}


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handler para HTTPException de Starlette (rutas inexistentes, 405, etc.).

    Todo status no catalogado se reduce al 500 genérico.
    """
    code = _STATUS_TO_CODE.get(exc.status_code)
    if code is None:
        return problem_response(
            request,
            status_code=500,
            code=ErrorCode.INTERNAL_ERROR,
            detail=INTERNAL_ERROR_MESSAGE,
        )

    if code == ErrorCode.NOT_FOUND:
        detail = "Not Found"
    elif code == ErrorCode.METHOD_NOT_ALLOWED:
        detail = "Method Not Allowed"
    else:
        detail = str(exc.detail)

    return problem_response(
        request,
        status_code=exc.status_code,
        code=code,
        detail=detail,
        headers=getattr(exc, "headers", None),
    )
