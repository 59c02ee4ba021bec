"""
Shared Domain Kernel

Contains exceptions, events and constrained types shared across the package.
"""

from playlist_engine.domain.shared.exceptions import (
    AccessDeniedError,
    ConflictError,
    DomainError,
    EntityNotFoundError,
    PersistenceError,
    ValidationError,
)

__all__ = [
    "DomainError",
    "ValidationError",
    "EntityNotFoundError",
    "AccessDeniedError",
    "ConflictError",
    "PersistenceError",
]
