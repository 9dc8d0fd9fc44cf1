"""
===============================================================================
TARJETA CRC — interfaces/api/http/validation.py (Validation Layer)
===============================================================================

Responsabilidades:
  - Leer el body JSON crudo DESPUÉS del guard de identidad (dependency propia).
  - Validar payloads contra schemas cerrados (extra="forbid", strict).
  - Traducir errores de pydantic a una lista ordenada de {field, message}
    con mensajes estables (el contrato que ve el cliente).
  - Validar ids de tarea de la URL antes de tocar storage.

Colaboradores:
  - schemas/*.py (modelos + FIELD_MESSAGES)
  - api/exception_handlers.py (PayloadValidationError -> 400)

Reglas:
  - "_form" identifica errores de todo el payload (no de un campo).
  - El texto crudo de pydantic nunca llega al cliente.
===============================================================================
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

FORM_FIELD = "_form"
BODY_NOT_OBJECT_MESSAGE = "Request body must be a JSON object."
INVALID_TASK_ID_MESSAGE = "id must be a positive integer."

# BIGSERIAL: 1 .. 2^63 - 1
MAX_TASK_ID = 2**63 - 1

_DIGITS = re.compile(r"[0-9]+")

# Mensajes por tipo de error de pydantic. {label} = nombre del campo capitalizado.
_DEFAULT_MESSAGES: Dict[str, str] = {
    "missing": "{label} is required.",
    "string_type": "{label} must be a string.",
    "string_too_short": "{label} cannot be empty.",
    "string_too_long": "{label} is too long.",
    "bool_type": "{label} must be true or false.",
    "extra_forbidden": "Unknown field.",
}
_FALLBACK_MESSAGE = "{label} is invalid."

M = TypeVar("M", bound=BaseModel)

ErrorItem = Dict[str, str]


class PayloadValidationError(Exception):
    """Payload inválido; `errors` es la lista ordenada {field, message}."""

    def __init__(self, errors: List[ErrorItem]):
        self.errors = list(errors)
        super().__init__(f"{len(self.errors)} validation error(s)")


def _form_error(message: str) -> PayloadValidationError:
    return PayloadValidationError([{"field": FORM_FIELD, "message": message}])


def _field_name(loc: tuple) -> str:
    if not loc:
        return FORM_FIELD
    return ".".join(str(part) for part in loc)


def _message_for(model: Type[BaseModel], field: str, error: Dict[str, Any]) -> str:
    error_type = error.get("type", "")

    # R: ValueError propio (validators del schema): el texto ya es el mensaje final.
    if error_type == "value_error":
        ctx_error = (error.get("ctx") or {}).get("error")
        if ctx_error is not None:
            return str(ctx_error)

    # R: "ids.3" usa el override de "ids" si no hay uno específico.
    base_field = field.split(".")[0]
    overrides: Dict[tuple, str] = getattr(model, "FIELD_MESSAGES", {})
    for key in ((field, error_type), (base_field, error_type)):
        if key in overrides:
            return overrides[key]

    label = base_field.replace("_", " ").capitalize()
    template = _DEFAULT_MESSAGES.get(error_type, _FALLBACK_MESSAGE)
    return template.format(label=label)


def translate_errors(model: Type[BaseModel], exc: ValidationError) -> List[ErrorItem]:
    """ValidationError de pydantic -> [{field, message}] (mismo orden)."""
    items: List[ErrorItem] = []
    for error in exc.errors():
        field = _field_name(tuple(error.get("loc", ())))
        items.append({"field": field, "message": _message_for(model, field, error)})
    return items


def validate_payload(model: Type[M], raw: Any) -> M:
    """
    Valida `raw` (JSON ya decodificado) contra `model`.

    Raises:
        PayloadValidationError: body no-objeto o reglas violadas.
    """
    if not isinstance(raw, dict):
        raise _form_error(BODY_NOT_OBJECT_MESSAGE)

    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise PayloadValidationError(translate_errors(model, exc)) from exc


def parse_task_id(raw: str) -> int:
    """Id de URL -> int positivo (solo dígitos decimales, rango BIGSERIAL)."""
    if raw is None or not _DIGITS.fullmatch(raw):
        raise PayloadValidationError(
            [{"field": "id", "message": INVALID_TASK_ID_MESSAGE}]
        )

    task_id = int(raw)
    if task_id < 1 or task_id > MAX_TASK_ID:
        raise PayloadValidationError(
            [{"field": "id", "message": INVALID_TASK_ID_MESSAGE}]
        )
    return task_id


async def read_json_body(request: Request) -> Any:
    """
    Dependency FastAPI: body JSON crudo.

    Se declara DESPUÉS de require_identity() para que el guard corra primero.
    """
    try:
        return await request.json()
    except ValueError as exc:
        raise _form_error(BODY_NOT_OBJECT_MESSAGE) from exc


__all__ = [
    "FORM_FIELD",
    "INVALID_TASK_ID_MESSAGE",
    "MAX_TASK_ID",
    "PayloadValidationError",
    "parse_task_id",
    "read_json_body",
    "translate_errors",
    "validate_payload",
]
