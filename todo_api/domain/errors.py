"""
Errores de dominio.

Cada error lleva un `kind` (ErrorKind) para que los llamadores distingan
"entidad ausente" de "falla del store" sin comparar mensajes.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    PERSISTENCE = "persistence"


class TodoApiError(Exception):
    """Base de los errores de dominio."""

    kind: ErrorKind = ErrorKind.PERSISTENCE
    default_message = "Unexpected error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(TodoApiError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found entity"


class ValidationError(TodoApiError):
    """Payload inválido; `details` lleva un mensaje por campo."""

    kind = ErrorKind.VALIDATION
    default_message = "Invalid todo payload"

    def __init__(self, message: str | None = None, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = list(details or [])


class PersistenceError(TodoApiError):
    """Cualquier falla del store que no sea "no hay fila" (conexión, SQL, constraints)."""

    kind = ErrorKind.PERSISTENCE
    default_message = "Database error"
