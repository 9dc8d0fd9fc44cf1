# taskvault/crosscutting/logger.py
"""
===============================================================================
MÓDULO: Logger estructurado (JSON) con contexto de request
===============================================================================

Objetivo
--------
Loguear de forma parseable (JSON) y correlacionable por request_id, sin
dejar passwords, tokens ni emails en los logs.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + setup_logger()

Responsabilidades:
  - Formatear logs como una línea JSON
  - Enriquecer con contexto (request_id, method, path)
  - Redactar extras sensibles y recortar strings largos
  - Adjuntar stacktrace cuando hay excepción

Colaboradores:
  - taskvault/context.py (ContextVars)
  - crosscutting/config.py (LOG_LEVEL / LOG_JSON)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

REDACTED = "***REDACTADO***"
MAX_EXTRA_CHARS = 4_000

# Extras que nunca se escriben tal cual.
SENSITIVE_KEYS = frozenset(
    {
        "password",
        "password_hash",
        "secret",
        "jwt_secret",
        "token",
        "authorization",
        "email",
    }
)

# Atributos estándar de LogRecord: todo lo demás es "extra".
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def _clean_extra(key: str, value: Any) -> Any:
    if key.lower() in SENSITIVE_KEYS:
        return REDACTED
    if isinstance(value, str) and len(value) > MAX_EXTRA_CHARS:
        return value[:MAX_EXTRA_CHARS] + "…(truncado)"
    if isinstance(value, dict):
        return {str(k): _clean_extra(str(k), v) for k, v in value.items()}
    return value


class JSONFormatter(logging.Formatter):
    """LogRecord -> JSON de una línea (contexto de request + extras limpios)."""

    def format(self, record: logging.LogRecord) -> str:
        from ..context import get_context_dict

        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.lineno}",
        }
        payload.update(get_context_dict())

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                payload[key] = _clean_extra(key, value)

        # Stacktrace solo en logs; las respuestas HTTP nunca lo incluyen.
        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc, tb = record.exc_info
            payload["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc),
                "stacktrace": traceback.format_exception(exc_type, exc, tb),
            }

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger(name: str = "taskvault") -> logging.Logger:
    """
    Configura el logger de la app (idempotente: no duplica handlers).

    Sin settings válidos (p.ej. scripts sin DATABASE_URL) queda en INFO + JSON.
    """
    log = logging.getLogger(name)

    level, use_json = "INFO", True
    try:
        from .config import get_settings

        settings = get_settings()
        level, use_json = settings.log_level.upper(), settings.log_json
    except ValidationError:
        pass

    log.setLevel(getattr(logging, level, logging.INFO))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter()
            if use_json
            else logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        log.addHandler(handler)

    return log


logger = setup_logger()
