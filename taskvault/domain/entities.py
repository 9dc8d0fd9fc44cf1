"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Responsabilidades:
  - Definir la entidad Task (registro de una lista de tareas con dueño).

Colaboradores:
  - domain.repositories.TaskRepository (contrato de persistencia)
  - infrastructure.repositories.* (mapean filas -> Task)

Invariantes:
  - user_id es inmutable: lo fija el creador y ninguna operación lo cambia.
  - title nunca está vacío (lo garantiza la capa de validación).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Task:
    """Tarea perteneciente a exactamente un usuario."""

    id: int
    user_id: UUID
    title: str
    description: Optional[str] = None
    completed: bool = False
    created_at: Optional[datetime] = None
