"""
===============================================================================
TARJETA CRC — schemas/tasks.py
===============================================================================

Módulo:
    Schemas HTTP para Tasks

Responsabilidades:
    - Definir DTOs de request (cerrados, estrictos, con trim) y de response.
    - Declarar mensajes estables por (campo, tipo de error).
    - Convertir el request de update en un TaskUpdate tipado (UNSET para
      campos no enviados).

Colaboradores:
    - validation.validate_payload (traducción de errores)
    - domain.task_update.TaskUpdate
    - domain.entities.Task
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, ClassVar, Dict, List, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from taskvault.application.usecases.tasks import NO_FIELDS_MESSAGE, BatchOutcome
from taskvault.domain.entities import Task
from taskvault.domain.task_update import TaskUpdate

from ..validation import MAX_TASK_ID

MAX_TITLE_CHARS = 255
MAX_DESCRIPTION_CHARS = 5000

_CLOSED_STRICT = ConfigDict(extra="forbid", strict=True, str_strip_whitespace=True)


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class TaskCreateRequest(BaseModel):
    """
    Request para crear una tarea.

    - description omitida -> NULL; enviada debe ser string (null es error de tipo).
    """

    model_config = _CLOSED_STRICT

    FIELD_MESSAGES: ClassVar[Dict[Tuple[str, str], str]] = {}

    title: str = Field(..., min_length=1, max_length=MAX_TITLE_CHARS)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_CHARS)

    @field_validator("description", mode="before")
    @classmethod
    def reject_null_description(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Description must be a string.")
        return v


class TaskUpdateRequest(BaseModel):
    """
    Request de update parcial.

    - Cada campo es opcional, pero al menos uno es obligatorio (error "_form").
    - null explícito NO significa "limpiar": es un error de tipo.
    - description enviada vacía se rechaza.
    """

    model_config = _CLOSED_STRICT

    FIELD_MESSAGES: ClassVar[Dict[Tuple[str, str], str]] = {}

    NULL_MESSAGES: ClassVar[Dict[str, str]] = {
        "title": "Title must be a string.",
        "description": "Description must be a string.",
        "completed": "Completed must be true or false.",
    }

    title: str | None = Field(default=None, min_length=1, max_length=MAX_TITLE_CHARS)
    description: str | None = Field(
        default=None, min_length=1, max_length=MAX_DESCRIPTION_CHARS
    )
    completed: bool | None = None

    @field_validator("title", "description", "completed", mode="before")
    @classmethod
    def reject_explicit_null(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            raise ValueError(cls.NULL_MESSAGES[info.field_name])
        return v

    @model_validator(mode="after")
    def require_at_least_one_field(self) -> "TaskUpdateRequest":
        if not self.model_fields_set:
            raise ValueError(NO_FIELDS_MESSAGE)
        return self

    def to_task_update(self) -> TaskUpdate:
        """Solo los campos enviados; el resto queda UNSET."""
        return TaskUpdate(**{name: getattr(self, name) for name in self.model_fields_set})


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class TaskRes(BaseModel):
    id: int
    title: str
    description: str | None = None
    completed: bool
    created_at: datetime | None = None

    @classmethod
    def from_task(cls, task: Task) -> "TaskRes":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            completed=task.completed,
            created_at=task.created_at,
        )


class TaskEnvelopeRes(BaseModel):
    task: TaskRes


class TasksListRes(BaseModel):
    tasks: List[TaskRes]


class DeleteTaskRes(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "Task deleted."
    task_id: int = Field(..., alias="taskId")


# -----------------------------------------------------------------------------
# Batch
# -----------------------------------------------------------------------------
MAX_BATCH_IDS = 500

_BATCH_ID_MESSAGE = "Each id must be a positive integer."

TaskId = Annotated[int, Field(ge=1, le=MAX_TASK_ID)]


class BatchCompleteRequest(BaseModel):
    """Ids a marcar como completadas (cada id es un statement independiente)."""

    model_config = _CLOSED_STRICT

    FIELD_MESSAGES: ClassVar[Dict[Tuple[str, str], str]] = {
        ("ids", "list_type"): "Ids must be a list.",
        ("ids", "too_short"): "At least one id is required.",
        ("ids", "too_long"): f"At most {MAX_BATCH_IDS} ids per request.",
        ("ids", "int_type"): _BATCH_ID_MESSAGE,
        ("ids", "greater_than_equal"): _BATCH_ID_MESSAGE,
        ("ids", "less_than_equal"): _BATCH_ID_MESSAGE,
    }

    ids: List[TaskId] = Field(..., min_length=1, max_length=MAX_BATCH_IDS)


class BatchOutcomeRes(BaseModel):
    succeeded: List[int]
    not_found: List[int]
    failed: List[int]
    partial: bool

    @classmethod
    def from_outcome(cls, outcome: BatchOutcome) -> "BatchOutcomeRes":
        return cls(
            succeeded=list(outcome.succeeded),
            not_found=list(outcome.not_found),
            failed=list(outcome.failed),
            partial=outcome.is_partial,
        )
