"""
===============================================================================
TARJETA CRC — identity/credentials.py
===============================================================================

Módulo:
    Credential Store (Argon2id)

Responsabilidades:
    - Hashear passwords (one-way, salt aleatorio por llamada, costo fijo).
    - Verificar password vs hash almacenado (comparación constant-time de la lib).
    - Proveer un hash "dummy" para igualar tiempos cuando el email no existe.

Colaboradores:
    - argon2.PasswordHasher
    - crosscutting.exceptions.CredentialError

Decisiones de diseño:
    - Parámetros de costo fijos en constantes (verificación sub-segundo).
    - Un hash inválido/corrupto en DB se trata como "no coincide" (False).
    - Una falla al hashear es CredentialError: se reduce al 500 genérico.
===============================================================================
"""

from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import HashingError, InvalidHashError, VerificationError

from ..crosscutting.exceptions import CredentialError

# Costo fijo (Argon2id). Cambiarlo invalida benchmarks, no hashes existentes:
# el hash guarda sus propios parámetros.
ARGON2_TIME_COST: int = 3
ARGON2_MEMORY_COST_KIB: int = 64 * 1024
ARGON2_PARALLELISM: int = 4

_password_hasher = PasswordHasher(
    time_cost=ARGON2_TIME_COST,
    memory_cost=ARGON2_MEMORY_COST_KIB,
    parallelism=ARGON2_PARALLELISM,
)

# Se verifica contra este hash cuando el email no existe (mismo costo de CPU).
DUMMY_HASH: str = _password_hasher.hash("taskvault-dummy-password")


def hash_password(password: str) -> str:
    """Hashea un password usando Argon2id (salt nuevo en cada llamada)."""
    try:
        return _password_hasher.hash(password)
    except HashingError as exc:
        raise CredentialError("No se pudo hashear el password.", original_error=exc) from exc


def verify_password(password: str, password_hash: str) -> bool:
    """Verifica password vs hash almacenado."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False
