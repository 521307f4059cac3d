"""Application layer: use cases, ports, and outcome DTOs. Depends only on domain."""

from contactbook.application.contact_service import ContactService
from contactbook.application.dto import (
    Conflict,
    InternalError,
    InvalidInput,
    NotFound,
    Outcome,
    Success,
)
from contactbook.application.ports import ConstraintViolation, ContactRepository

__all__ = [
    "Conflict",
    "ConstraintViolation",
    "ContactRepository",
    "ContactService",
    "InternalError",
    "InvalidInput",
    "NotFound",
    "Outcome",
    "Success",
]
