"""
===============================================================================
TASK USE CASES PACKAGE (Public API / Exports)
===============================================================================

Responsibilities:
    - Re-exportar los casos de uso de tareas y sus resultados.
    - Definir __all__ como contrato público del paquete.
===============================================================================
"""

from __future__ import annotations

from .batch_tasks import BatchOutcome, BatchTaskService
from .create_task import CreateTaskInput, CreateTaskUseCase
from .delete_task import DeleteTaskUseCase
from .list_tasks import ListTasksUseCase
from .task_results import (
    TASK_NOT_FOUND,
    DeleteTaskResult,
    TaskError,
    TaskErrorCode,
    TaskListResult,
    TaskResult,
)
from .update_task import NO_FIELDS_MESSAGE, UpdateTaskUseCase

__all__ = [
    "BatchOutcome",
    "BatchTaskService",
    "CreateTaskInput",
    "CreateTaskUseCase",
    "DeleteTaskResult",
    "DeleteTaskUseCase",
    "ListTasksUseCase",
    "NO_FIELDS_MESSAGE",
    "TASK_NOT_FOUND",
    "TaskError",
    "TaskErrorCode",
    "TaskListResult",
    "TaskResult",
    "UpdateTaskUseCase",
]
