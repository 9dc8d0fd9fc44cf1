"""
===============================================================================
CRC CARD — infrastructure/db/errors.py
===============================================================================

Componente:
  Errores tipados del pool / conectividad

Responsabilidades:
  - Dar semántica clara al ciclo de vida del pool ("no inicializado", "doble init").
  - Marcar fallas de adquisición de conexión; los repositorios las envuelven
    en DatabaseError y terminan como 500 genérico.
===============================================================================
"""


class DatabasePoolError(Exception):
    """Base de errores del pool."""


class PoolAlreadyInitializedError(DatabasePoolError):
    """init_pool() llamado dos veces en el mismo proceso."""


class PoolNotInitializedError(DatabasePoolError):
    """get_pool() llamado antes de init_pool() (o después de close_pool())."""


class DatabaseConnectionError(DatabasePoolError):
    """No se pudo adquirir o validar una conexión del pool."""
