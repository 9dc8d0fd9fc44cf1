"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/tasks.py
===============================================================================

Class/Module:
    Tasks Router

Responsibilities:
    - Exponer CRUD de tareas del usuario autenticado.
    - Exponer las operaciones masivas (completar ids, limpiar completadas);
      responden 200 con el resultado por id, aun si es parcial.
    - Orden fijo por endpoint: guard de identidad -> body -> validación ->
      caso de uso. Un request sin token válido nunca llega a leer el body.
    - Traducir TaskError -> RFC7807.

Collaborators:
    - taskvault.identity.access_guard.require_identity
    - taskvault.interfaces.api.http.validation
    - taskvault.application.usecases.tasks
    - taskvault.container (factories DI)

Notas:
    - La Identity que devuelve el guard se pasa tal cual al caso de uso; el
      payload nunca aporta un user_id.
===============================================================================
"""

from __future__ import annotations

from typing import Any, NoReturn

from fastapi import APIRouter, Depends, status

from taskvault.application.usecases.tasks import (
    BatchTaskService,
    CreateTaskInput,
    CreateTaskUseCase,
    DeleteTaskUseCase,
    ListTasksUseCase,
    TaskError,
    TaskErrorCode,
    UpdateTaskUseCase,
)
from taskvault.container import (
    get_batch_task_service,
    get_create_task_use_case,
    get_delete_task_use_case,
    get_list_tasks_use_case,
    get_update_task_use_case,
)
from taskvault.crosscutting.error_responses import (
    internal_error,
    not_found,
    validation_error,
)
from taskvault.identity.access_guard import require_identity
from taskvault.identity.users import Identity

from ..schemas.tasks import (
    BatchCompleteRequest,
    BatchOutcomeRes,
    DeleteTaskRes,
    TaskCreateRequest,
    TaskEnvelopeRes,
    TaskRes,
    TasksListRes,
    TaskUpdateRequest,
)
from ..validation import parse_task_id, read_json_body, validate_payload

router = APIRouter(tags=["tasks"])


def _raise_task_error(error: TaskError) -> NoReturn:
    """Traduce TaskError (application layer) a RFC7807."""
    if error.code == TaskErrorCode.VALIDATION_ERROR:
        raise validation_error([{"field": error.field, "message": error.message}])

    if error.code == TaskErrorCode.NOT_FOUND:
        raise not_found("Task")

    raise internal_error()


@router.get("/tasks", response_model=TasksListRes)
def list_tasks(
    identity: Identity = Depends(require_identity()),
    use_case: ListTasksUseCase = Depends(get_list_tasks_use_case),
):
    result = use_case.execute(identity)
    return TasksListRes(tasks=[TaskRes.from_task(t) for t in result.tasks])


@router.post(
    "/tasks",
    response_model=TaskEnvelopeRes,
    status_code=status.HTTP_201_CREATED,
)
def create_task(
    identity: Identity = Depends(require_identity()),
    raw_body: Any = Depends(read_json_body),
    use_case: CreateTaskUseCase = Depends(get_create_task_use_case),
):
    req = validate_payload(TaskCreateRequest, raw_body)

    result = use_case.execute(
        identity,
        CreateTaskInput(title=req.title, description=req.description),
    )
    if result.error is not None:
        _raise_task_error(result.error)

    return TaskEnvelopeRes(task=TaskRes.from_task(result.task))


@router.post("/tasks/batch/complete", response_model=BatchOutcomeRes)
def complete_tasks(
    identity: Identity = Depends(require_identity()),
    raw_body: Any = Depends(read_json_body),
    service: BatchTaskService = Depends(get_batch_task_service),
):
    req = validate_payload(BatchCompleteRequest, raw_body)

    outcome = service.complete_all(identity, req.ids)
    return BatchOutcomeRes.from_outcome(outcome)


@router.post("/tasks/batch/clear-completed", response_model=BatchOutcomeRes)
def clear_completed_tasks(
    identity: Identity = Depends(require_identity()),
    service: BatchTaskService = Depends(get_batch_task_service),
):
    outcome = service.clear_completed(identity)
    return BatchOutcomeRes.from_outcome(outcome)


@router.put("/tasks/{task_id}", response_model=TaskEnvelopeRes)
def update_task(
    task_id: str,
    identity: Identity = Depends(require_identity()),
    raw_body: Any = Depends(read_json_body),
    use_case: UpdateTaskUseCase = Depends(get_update_task_use_case),
):
    parsed_id = parse_task_id(task_id)
    req = validate_payload(TaskUpdateRequest, raw_body)

    result = use_case.execute(identity, parsed_id, req.to_task_update())
    if result.error is not None:
        _raise_task_error(result.error)

    return TaskEnvelopeRes(task=TaskRes.from_task(result.task))


@router.delete("/tasks/{task_id}", response_model=DeleteTaskRes)
def delete_task(
    task_id: str,
    identity: Identity = Depends(require_identity()),
    use_case: DeleteTaskUseCase = Depends(get_delete_task_use_case),
):
    parsed_id = parse_task_id(task_id)

    result = use_case.execute(identity, parsed_id)
    if result.error is not None:
        _raise_task_error(result.error)

    return DeleteTaskRes(task_id=result.task_id)
