"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/task.py
============================================================
Class: InMemoryTaskRepository

Responsibilities:
  - Almacenar tareas en memoria (tests / desarrollo local sin Postgres).
  - Replicar la semántica del repo Postgres:
      - predicado de ownership en cada lectura/escritura/borrado
      - ids enteros positivos autoincrementales
      - orden created_at DESC, id DESC
      - None para "no existe" y para "es de otro"

Collaborators:
  - domain.entities.Task, domain.task_update.TaskUpdate
  - domain.repositories.TaskRepository (contrato a implementar)
  - identity.users.Identity

Constraints / Notes:
  - Thread-safe: cada operación lee/escribe bajo lock (equivale a la
    transacción implícita de una sentencia en Postgres).
============================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from itertools import count
from threading import Lock
from typing import Dict, List, Optional

from ....domain.entities import Task
from ....domain.repositories import TaskRepository
from ....domain.task_update import TaskUpdate
from ....identity.users import Identity


class InMemoryTaskRepository(TaskRepository):
    """
    Repositorio in-memory, thread-safe, para tareas.

    Modelo mental:
    - _tasks es la "tabla" (id -> Task).
    - _owned() es el equivalente a `WHERE user_id = %s AND id = %s`.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._tasks: Dict[int, Task] = {}
        self._ids = count(1)

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _owned(self, owner: Identity, task_id: int) -> Optional[Task]:
        """R: Lookup con predicado de ownership. Llamar con el lock tomado."""
        task = self._tasks.get(task_id)
        if task is None or task.user_id != owner.user_id:
            return None
        return task

    def list_tasks(self, owner: Identity) -> List[Task]:
        with self._lock:
            owned = [t for t in self._tasks.values() if t.user_id == owner.user_id]
        return sorted(
            owned,
            key=lambda t: (t.created_at or datetime.min.replace(tzinfo=timezone.utc), t.id),
            reverse=True,
        )

    def create_task(
        self,
        owner: Identity,
        *,
        title: str,
        description: Optional[str] = None,
    ) -> Task:
        with self._lock:
            task = Task(
                id=next(self._ids),
                user_id=owner.user_id,
                title=title,
                description=description,
                completed=False,
                created_at=self._now(),
            )
            self._tasks[task.id] = task
        return task

    def update_task(
        self, owner: Identity, task_id: int, changes: TaskUpdate
    ) -> Optional[Task]:
        if changes.is_empty():
            raise ValueError("TaskUpdate without fields cannot be applied")

        with self._lock:
            current = self._owned(owner, task_id)
            if current is None:
                return None
            updated = changes.apply_to(current)
            self._tasks[task_id] = updated
        return updated

    def delete_task(self, owner: Identity, task_id: int) -> Optional[int]:
        with self._lock:
            if self._owned(owner, task_id) is None:
                return None
            del self._tasks[task_id]
        return task_id

    def ping(self) -> bool:
        return True
