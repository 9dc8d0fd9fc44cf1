# taskvault/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas del backend (errores internos)
===============================================================================

Objetivo
--------
Tener excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message “humana” (solo para logs: NUNCA viaja al cliente)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  TaskVaultError + subclases

Responsabilidades:
  - Estandarizar errores internos que luego se reducen a un 500 genérico
  - Generar error_id para rastreo

Colaboradores:
  - api/exception_handlers.py (loguea y normaliza)
  - infrastructure/repositories/postgres/* (DatabaseError)
  - identity/credentials.py (CredentialError)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class TaskVaultError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      TaskVaultError

    Responsabilidades:
      - Base para errores internos del sistema
      - Proveer error_code + error_id + message

    Colaboradores:
      - api/exception_handlers.py
    ----------------------------------------------------------------------------
    """

    error_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(TaskVaultError):
    """Errores de DB (conexión, query, timeout, pool)."""

    error_code: str = "DATABASE_ERROR"


class UserAlreadyExistsError(DatabaseError):
    """Violación de unicidad (username/email) al crear un usuario."""

    error_code: str = "USER_ALREADY_EXISTS"


class CredentialError(TaskVaultError):
    """Falla al hashear un password (fatal para la operación, no para el proceso)."""

    error_code: str = "CREDENTIAL_ERROR"
