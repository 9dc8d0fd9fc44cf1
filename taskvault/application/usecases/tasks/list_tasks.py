"""
===============================================================================
USE CASE: List Tasks
===============================================================================

Business Goal:
    Devolver las tareas del usuario autenticado, más nuevas primero.

CRC:
    Class: ListTasksUseCase
    Responsibilities:
        - Delegar al repositorio con la Identity verificada (nunca otro id).
        - Devolver lista vacía cuando no hay filas (no es un error).
    Collaborators:
        - TaskRepository.list_tasks(owner)
===============================================================================
"""

from __future__ import annotations

from ....domain.repositories import TaskRepository
from ....identity.users import Identity
from .task_results import TaskListResult


class ListTasksUseCase:
    """Query: tareas del owner."""

    def __init__(self, task_repository: TaskRepository) -> None:
        self._tasks = task_repository

    def execute(self, owner: Identity) -> TaskListResult:
        return TaskListResult(tasks=self._tasks.list_tasks(owner))
