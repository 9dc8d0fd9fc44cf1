"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelos de Usuario e Identidad verificada

Responsabilidades:
    - Definir el dataclass User utilizado por registro/login.
    - Definir Identity: el único valor que habilita acceso a datos de tareas.

Colaboradores:
    - identity/tokens.py: produce Identity a partir de un token verificado.
    - infrastructure/repositories/*/user.py: mapea filas -> User.
    - infrastructure/repositories/*/task.py: recibe Identity en cada operación.

Notas:
    - Este módulo NO contiene lógica: solo “shapes” de datos.
    - Identity solo se construye desde un token verificado (o en tests).
      Nunca a partir de ids que mande el cliente.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario (password_hash nunca se serializa hacia afuera)."""

    id: UUID
    username: str
    email: str
    password_hash: str
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class Identity:
    """Identidad confiable derivada de un token verificado."""

    user_id: UUID
