"""Base exception classes for domain-level errors.

Every error carries a stable ``code`` and the HTTP ``status_code`` the outer
transport layer should answer with.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    status_code: int = 500

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when input validation fails before any transaction opens."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class EntityNotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    status_code = 404

    def __init__(self, entity_type: str, identifier: str | int, message: str | None = None) -> None:
        msg = message or f"{entity_type} with id '{identifier}' not found"
        super().__init__(msg, code="ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.identifier = identifier


class AccessDeniedError(DomainError):
    """Raised when a visibility or edit-mode rule rejects the requester."""

    status_code = 403

    def __init__(self, action: str, playlist_id: str, message: str | None = None) -> None:
        msg = message or f"Not allowed to {action} playlist '{playlist_id}'"
        super().__init__(msg, code="FORBIDDEN")
        self.action = action
        self.playlist_id = playlist_id


class ConflictError(DomainError):
    """Raised when the current state makes the operation impossible."""

    status_code = 409

    def __init__(self, operation: str, message: str | None = None) -> None:
        msg = message or f"Cannot perform '{operation}' in the current state"
        super().__init__(msg, code="CONFLICT")
        self.operation = operation


class PersistenceError(DomainError):
    """Raised when the store fails; the open transaction has been rolled back."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message, code="INTERNAL")
