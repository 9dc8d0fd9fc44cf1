"""
===============================================================================
USE CASES PACKAGE (Public API / Exports)
===============================================================================

Responsibilities:
    - Punto único de importación de los casos de uso (auth + tasks).
===============================================================================
"""

from __future__ import annotations

from .auth import (
    AuthErrorCode,
    AuthResult,
    LoginUserInput,
    LoginUserUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
)
from .tasks import (
    BatchOutcome,
    BatchTaskService,
    CreateTaskInput,
    CreateTaskUseCase,
    DeleteTaskResult,
    DeleteTaskUseCase,
    ListTasksUseCase,
    TaskErrorCode,
    TaskListResult,
    TaskResult,
    UpdateTaskUseCase,
)

__all__ = [
    "AuthErrorCode",
    "AuthResult",
    "BatchOutcome",
    "BatchTaskService",
    "CreateTaskInput",
    "CreateTaskUseCase",
    "DeleteTaskResult",
    "DeleteTaskUseCase",
    "ListTasksUseCase",
    "LoginUserInput",
    "LoginUserUseCase",
    "RegisterUserInput",
    "RegisterUserUseCase",
    "TaskErrorCode",
    "TaskListResult",
    "TaskResult",
    "UpdateTaskUseCase",
]
