"""DTOs HTTP (pydantic) de tasks y auth."""

from .auth import LoginRequest, LoginRes, RegisterRequest, RegisterRes
from .tasks import (
    BatchCompleteRequest,
    BatchOutcomeRes,
    DeleteTaskRes,
    TaskCreateRequest,
    TaskEnvelopeRes,
    TaskRes,
    TasksListRes,
    TaskUpdateRequest,
)

__all__ = [
    "BatchCompleteRequest",
    "BatchOutcomeRes",
    "DeleteTaskRes",
    "LoginRequest",
    "LoginRes",
    "RegisterRequest",
    "RegisterRes",
    "TaskCreateRequest",
    "TaskEnvelopeRes",
    "TaskRes",
    "TasksListRes",
    "TaskUpdateRequest",
]
