"""
Contactbook core: clean-architecture layout.

- domain: the Contact entity. No outer dependencies.
- application: use cases (ContactService), ports (ContactRepository), outcome DTOs.
- infrastructure: adapters (InMemoryContactRepository, SqlContactRepository) and config.
"""

from contactbook.application import (
    Conflict,
    ConstraintViolation,
    ContactRepository,
    ContactService,
    InternalError,
    InvalidInput,
    NotFound,
    Outcome,
    Success,
)
from contactbook.domain import Contact
from contactbook.infrastructure import (
    DatabaseConfig,
    InMemoryContactRepository,
    SqlContactRepository,
)

__all__ = [
    "Conflict",
    "ConstraintViolation",
    "Contact",
    "ContactRepository",
    "ContactService",
    "DatabaseConfig",
    "InMemoryContactRepository",
    "InternalError",
    "InvalidInput",
    "NotFound",
    "Outcome",
    "SqlContactRepository",
    "Success",
]
