"""
===============================================================================
USE CASE: Update Task (title / description / completed)
===============================================================================

Business Goal:
    Aplicar un partial update sobre una tarea del usuario autenticado.

Why (Context / Intención):
    - Invariantes:
        * al menos un campo debe ser provisto (error sobre "_form")
        * el repositorio filtra por owner + id en la MISMA sentencia
          (sin leer antes: no hay ventana check/use)
        * "no existe" y "es de otro" -> mismo NOT_FOUND (anti-enumeración)

CRC:
    Class: UpdateTaskUseCase
    Responsibilities:
        - Rechazar TaskUpdate vacío.
        - Delegar el update owner-scoped y traducir None -> NOT_FOUND.
    Collaborators:
        - TaskRepository.update_task(owner, task_id, changes)
        - domain.task_update.TaskUpdate
===============================================================================
"""

from __future__ import annotations

from ....domain.repositories import TaskRepository
from ....domain.task_update import TaskUpdate
from ....identity.users import Identity
from .task_results import TASK_NOT_FOUND, TaskError, TaskErrorCode, TaskResult

NO_FIELDS_MESSAGE = "At least one field is required to update a task."


class UpdateTaskUseCase:
    """Command: update parcial owner-scoped."""

    def __init__(self, task_repository: TaskRepository) -> None:
        self._tasks = task_repository

    def execute(
        self, owner: Identity, task_id: int, changes: TaskUpdate
    ) -> TaskResult:
        if changes.is_empty():
            return TaskResult(
                error=TaskError(
                    code=TaskErrorCode.VALIDATION_ERROR, message=NO_FIELDS_MESSAGE
                )
            )

        updated = self._tasks.update_task(owner, task_id, changes)
        if updated is None:
            return TaskResult(error=TASK_NOT_FOUND)

        return TaskResult(task=updated)
