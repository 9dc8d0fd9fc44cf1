"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for tasks and users (ports).
- Keep the application layer independent from PostgreSQL / in-memory storage.
- Make ownership scoping part of the signature: every task operation takes the
  caller's verified Identity as its first argument.

Collaborators
- domain.entities.Task, domain.task_update.TaskUpdate
- identity.users: User, Identity
- infrastructure.repositories: postgres / in_memory implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- "Not found" and "owned by someone else" are the same outcome (None).
"""

from typing import List, Optional, Protocol

from ..identity.users import Identity, User
from .entities import Task
from .task_update import TaskUpdate


class TaskRepository(Protocol):
    """
    R: Interface for owner-scoped task persistence.

    Every statement an implementation runs carries the ownership predicate.
    """

    def list_tasks(self, owner: Identity) -> List[Task]:
        """R: Owner's tasks, newest first. Empty list when none."""
        ...

    def create_task(
        self,
        owner: Identity,
        *,
        title: str,
        description: Optional[str] = None,
    ) -> Task:
        """R: Insert a task owned by `owner`."""
        ...

    def update_task(
        self, owner: Identity, task_id: int, changes: TaskUpdate
    ) -> Optional[Task]:
        """R: Apply `changes`; None if the task is missing or not owned."""
        ...

    def delete_task(self, owner: Identity, task_id: int) -> Optional[int]:
        """R: Delete; returns the deleted id, or None if missing or not owned."""
        ...

    def ping(self) -> bool:
        """R: Storage reachability check (health endpoint)."""
        ...


class UserRepository(Protocol):
    """R: Interface for user persistence (registration / login)."""

    def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    def find_user_by_username_or_email(
        self, username: str, email: str
    ) -> Optional[User]:
        ...

    def create_user(self, *, username: str, email: str, password_hash: str) -> User:
        """R: Raises UserAlreadyExistsError on a uniqueness violation."""
        ...
