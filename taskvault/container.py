"""
===============================================================================
TARJETA CRC — taskvault/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer repositorios y casos de uso (DIP: los use cases ven puertos).
  - Elegir backend de storage (postgres | memory) según Settings.
  - Mantener singletons con lru_cache para repositorios.

Colaboradores:
  - crosscutting.config.get_settings
  - domain.repositories (puertos)
  - infrastructure.repositories (implementaciones)
  - application.usecases (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO depende de FastAPI: los routers lo usan vía Depends.
  - Tests: `reset_container()` limpia los singletons entre casos.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    BatchTaskService,
    CreateTaskUseCase,
    DeleteTaskUseCase,
    ListTasksUseCase,
    LoginUserUseCase,
    RegisterUserUseCase,
    UpdateTaskUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import TaskRepository, UserRepository
from .infrastructure.repositories import (
    InMemoryTaskRepository,
    InMemoryUserRepository,
    PostgresTaskRepository,
    PostgresUserRepository,
)


def _use_memory_storage() -> bool:
    return get_settings().storage_backend == "memory"


# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_task_repository() -> TaskRepository:
    """Repositorio de tareas (Postgres o in-memory)."""
    if _use_memory_storage():
        return InMemoryTaskRepository()
    return PostgresTaskRepository()


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Repositorio de usuarios (Postgres o in-memory)."""
    if _use_memory_storage():
        return InMemoryUserRepository()
    return PostgresUserRepository()


# =============================================================================
# Casos de uso (livianos: se crean por request)
# =============================================================================


def get_list_tasks_use_case() -> ListTasksUseCase:
    return ListTasksUseCase(task_repository=get_task_repository())


def get_create_task_use_case() -> CreateTaskUseCase:
    return CreateTaskUseCase(task_repository=get_task_repository())


def get_update_task_use_case() -> UpdateTaskUseCase:
    return UpdateTaskUseCase(task_repository=get_task_repository())


def get_delete_task_use_case() -> DeleteTaskUseCase:
    return DeleteTaskUseCase(task_repository=get_task_repository())


def get_batch_task_service() -> BatchTaskService:
    return BatchTaskService(task_repository=get_task_repository())


def get_register_user_use_case() -> RegisterUserUseCase:
    return RegisterUserUseCase(user_repository=get_user_repository())


def get_login_user_use_case() -> LoginUserUseCase:
    return LoginUserUseCase(user_repository=get_user_repository())


def reset_container() -> None:
    """Limpia singletons (tests / cambio de settings)."""
    get_task_repository.cache_clear()
    get_user_repository.cache_clear()
