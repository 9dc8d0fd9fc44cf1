"""
===============================================================================
SERVICE: Batch Task Operations (mark all complete / clear completed)
===============================================================================

Business Goal:
    Ofrecer operaciones masivas sobre las tareas del usuario autenticado.

Why (Context / Intención):
    - Semántica NO atómica: cada id es una sentencia independiente
      (update/delete owner-scoped). No hay transacción que agrupe el lote.
    - Un fallo en un id no aborta el resto: el resultado informa el estado
      por id y el caller decide cómo reconciliar el éxito parcial.

CRC:
    Class: BatchTaskService
    Responsibilities:
        - complete_all: marcar completed=True cada id (uno por uno).
        - clear_completed: borrar las tareas completadas del owner.
        - Clasificar cada id en succeeded / not_found / failed.
    Collaborators:
        - TaskRepository (update_task / delete_task / list_tasks)
        - crosscutting.exceptions.TaskVaultError (fallas por id)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from ....crosscutting.exceptions import TaskVaultError
from ....crosscutting.logger import logger
from ....domain.repositories import TaskRepository
from ....domain.task_update import TaskUpdate
from ....identity.users import Identity


@dataclass
class BatchOutcome:
    """
    Resultado por id de una operación masiva.

      - succeeded: ids aplicados
      - not_found: ids inexistentes o ajenos (indistinguibles)
      - failed: ids cuyo statement falló (error interno ya logueado)
    """

    succeeded: List[int] = field(default_factory=list)
    not_found: List[int] = field(default_factory=list)
    failed: List[int] = field(default_factory=list)

    @property
    def is_partial(self) -> bool:
        return bool(self.succeeded) and bool(self.not_found or self.failed)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.not_found) + len(self.failed)


class BatchTaskService:
    """Operaciones masivas sin atomicidad agregada."""

    def __init__(self, task_repository: TaskRepository) -> None:
        self._tasks = task_repository

    def complete_all(self, owner: Identity, task_ids: Iterable[int]) -> BatchOutcome:
        outcome = BatchOutcome()
        changes = TaskUpdate(completed=True)

        for task_id in task_ids:
            try:
                updated = self._tasks.update_task(owner, task_id, changes)
            except TaskVaultError as exc:
                logger.error(
                    "Batch complete: fallo en tarea",
                    extra={"task_id": task_id, "error_id": exc.error_id},
                )
                outcome.failed.append(task_id)
                continue

            if updated is None:
                outcome.not_found.append(task_id)
            else:
                outcome.succeeded.append(task_id)

        self._log_outcome("complete_all", owner, outcome)
        return outcome

    def clear_completed(self, owner: Identity) -> BatchOutcome:
        outcome = BatchOutcome()
        completed_ids = [t.id for t in self._tasks.list_tasks(owner) if t.completed]

        for task_id in completed_ids:
            try:
                deleted = self._tasks.delete_task(owner, task_id)
            except TaskVaultError as exc:
                logger.error(
                    "Batch clear: fallo en tarea",
                    extra={"task_id": task_id, "error_id": exc.error_id},
                )
                outcome.failed.append(task_id)
                continue

            # R: Otro request pudo borrarla entre el listado y el delete.
            if deleted is None:
                outcome.not_found.append(task_id)
            else:
                outcome.succeeded.append(task_id)

        self._log_outcome("clear_completed", owner, outcome)
        return outcome

    @staticmethod
    def _log_outcome(operation: str, owner: Identity, outcome: BatchOutcome) -> None:
        logger.info(
            "Batch de tareas aplicado",
            extra={
                "operation": operation,
                "user_id": str(owner.user_id),
                "succeeded": len(outcome.succeeded),
                "not_found": len(outcome.not_found),
                "failed": len(outcome.failed),
            },
        )
