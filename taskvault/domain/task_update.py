"""
===============================================================================
TARJETA CRC — domain/task_update.py
===============================================================================

Módulo:
    Partial update tipado de Task

Responsabilidades:
  - Representar "qué columnas cambian" como un valor inmutable, no como un dict.
  - Distinguir "campo no enviado" (UNSET) de cualquier valor real.
  - Exponer las asignaciones en un orden estable (title, description, completed).
  - Aplicar el cambio sobre una Task en memoria (repo in-memory).

Colaboradores:
  - infrastructure.repositories.postgres.task.build_update_statement
  - infrastructure.repositories.in_memory.task
  - application.usecases.tasks.update_task

Notas:
  - El predicado de ownership NO vive acá: lo agrega el repositorio al compilar
    la sentencia, siempre al final.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar, Final, Union

from .entities import Task


class _Unset:
    """Marcador de "campo no provisto" (singleton)."""

    _instance: ClassVar["_Unset | None"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()


@dataclass(frozen=True)
class TaskUpdate:
    """Cambios a aplicar sobre una Task. Cada campo es UNSET o un valor nuevo."""

    COLUMNS: ClassVar[tuple[str, ...]] = ("title", "description", "completed")

    title: Union[str, _Unset] = UNSET
    description: Union[str, _Unset] = UNSET
    completed: Union[bool, _Unset] = UNSET

    def assignments(self) -> list[tuple[str, object]]:
        """Pares (columna, valor) de los campos provistos, en orden estable."""
        pairs: list[tuple[str, object]] = []
        for column in self.COLUMNS:
            value = getattr(self, column)
            if value is not UNSET:
                pairs.append((column, value))
        return pairs

    def is_empty(self) -> bool:
        return not self.assignments()

    def apply_to(self, task: Task) -> Task:
        """Devuelve una copia de `task` con los cambios aplicados."""
        return replace(task, **dict(self.assignments()))
