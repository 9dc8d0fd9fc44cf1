"""
===============================================================================
USE CASE: Create Task
===============================================================================

Business Goal:
    Crear una tarea cuyo dueño es SIEMPRE la Identity del token.

Why (Context / Intención):
    - El payload no puede elegir dueño: no existe campo user_id en el input.
    - description ausente se persiste como NULL explícito.

CRC:
    Class: CreateTaskUseCase
    Responsibilities:
        - Re-chequear que el título normalizado no esté vacío.
        - Persistir vía TaskRepository.create_task(owner, ...).
    Collaborators:
        - TaskRepository
        - task_results: TaskResult / TaskError
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.logger import logger
from ....domain.repositories import TaskRepository
from ....identity.users import Identity
from .task_results import TaskError, TaskErrorCode, TaskResult


@dataclass(frozen=True)
class CreateTaskInput:
    title: str
    description: str | None = None


class CreateTaskUseCase:
    """Command: crea una tarea para el owner."""

    def __init__(self, task_repository: TaskRepository) -> None:
        self._tasks = task_repository

    def execute(self, owner: Identity, input_data: CreateTaskInput) -> TaskResult:
        title = input_data.title.strip()
        if not title:
            return TaskResult(
                error=TaskError(
                    code=TaskErrorCode.VALIDATION_ERROR,
                    message="Title cannot be empty.",
                    field="title",
                )
            )

        description = (
            input_data.description.strip()
            if input_data.description is not None
            else None
        )

        task = self._tasks.create_task(owner, title=title, description=description)
        logger.info(
            "Tarea creada",
            extra={"user_id": str(owner.user_id), "task_id": task.id},
        )
        return TaskResult(task=task)
