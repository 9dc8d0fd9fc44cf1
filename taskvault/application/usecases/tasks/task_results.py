"""
===============================================================================
TASK USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Business Goal:
    Modelos compartidos de resultados y errores para los casos de uso de
    tareas, con un contrato estable para:
      - validaciones (inputs que no deberían llegar, pero se chequean igual)
      - recursos no encontrados (incluye "no es tuyo": anti-enumeración)

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    task_results models (module)

Responsibilities:
    - Definir TaskErrorCode / TaskError.
    - Representar resultados: TaskResult, TaskListResult, DeleteTaskResult.

Collaborators:
    - domain.entities.Task
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

from ....domain.entities import Task


class TaskErrorCode(str, Enum):
    """
    Códigos de error para casos de uso de tareas.

      - VALIDATION_ERROR: inputs inválidos o incompletos.
      - NOT_FOUND: la tarea no existe o pertenece a otro usuario
        (ambos casos son indistinguibles a propósito).
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class TaskError:
    """Error de caso de uso (sin stack traces ni metadata de infraestructura)."""

    code: TaskErrorCode
    message: str
    field: str = "_form"


@dataclass
class TaskResult:
    """
    Resultado para casos de uso que retornan una única Task.

    Contrato:
      - error is None => task presente
      - error != None => task es None
    """

    task: Task | None = None
    error: TaskError | None = None


@dataclass
class TaskListResult:
    """Resultado de listado: siempre lista (posiblemente vacía)."""

    tasks: List[Task]
    error: TaskError | None = None


@dataclass
class DeleteTaskResult:
    """Resultado del borrado: id borrado o error NOT_FOUND."""

    task_id: int | None = None
    error: TaskError | None = None


TASK_NOT_FOUND = TaskError(code=TaskErrorCode.NOT_FOUND, message="Task not found.")
