"""
Capa HTTP: routers, schemas y validación de payloads.

Exporta el router raíz para `api/main.py`.
"""

from .router import build_router, router

__all__ = ["build_router", "router"]
