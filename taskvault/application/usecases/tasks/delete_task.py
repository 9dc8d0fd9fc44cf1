"""
===============================================================================
USE CASE: Delete Task
===============================================================================

Business Goal:
    Borrar una tarea del usuario autenticado.

Notas:
    - Idempotente en efecto: borrar dos veces el mismo id da NOT_FOUND la
      segunda vez (no es un error interno).
    - Mismo NOT_FOUND para ids inexistentes y ajenos.

CRC:
    Class: DeleteTaskUseCase
    Collaborators:
        - TaskRepository.delete_task(owner, task_id)
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.repositories import TaskRepository
from ....identity.users import Identity
from .task_results import TASK_NOT_FOUND, DeleteTaskResult


class DeleteTaskUseCase:
    """Command: borrado owner-scoped."""

    def __init__(self, task_repository: TaskRepository) -> None:
        self._tasks = task_repository

    def execute(self, owner: Identity, task_id: int) -> DeleteTaskResult:
        deleted_id = self._tasks.delete_task(owner, task_id)
        if deleted_id is None:
            return DeleteTaskResult(error=TASK_NOT_FOUND)

        logger.info(
            "Tarea borrada",
            extra={"user_id": str(owner.user_id), "task_id": deleted_id},
        )
        return DeleteTaskResult(task_id=deleted_id)
