"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI.
  - Centralizar responses RFC7807 para OpenAPI.
  - Componer los routers de auth y tasks.

Patrones aplicados:
  - Factory: build_router() para testear composición sin efectos al importar.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.auth import router as auth_router
from .routers.tasks import router as tasks_router


def build_router() -> APIRouter:
    """Construye el router raíz (auth sin token, tasks con Bearer)."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(auth_router)
    api_router.include_router(tasks_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
