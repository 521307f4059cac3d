"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Protocol

from contactbook.domain import Contact


class ConstraintViolation(Exception):
    """Raised by a store when a write collides with a unique column."""

    def __init__(self, field: str, value: str | None = None) -> None:
        super().__init__(f"Unique constraint violated on {field}")
        self.field = field
        self.value = value


class ContactRepository(Protocol):
    """Persists and queries Contact rows."""

    def list_all(self) -> list[Contact]:
        """Return all contacts ordered by last name, then first name."""
        ...

    def get_by_id(self, contact_id: int) -> Contact | None:
        """Return the contact with the given id, or None."""
        ...

    def insert(self, contact: Contact) -> int:
        """Store a new contact (its id is ignored) and return the assigned id.
        Raises ConstraintViolation if the email is already taken."""
        ...

    def update_by_id(self, contact_id: int, contact: Contact) -> int:
        """Replace every field except id. Returns rows affected (0 or 1).
        Raises ConstraintViolation if the email belongs to another contact."""
        ...

    def delete_by_id(self, contact_id: int) -> int:
        """Remove the contact. Returns rows affected (0 or 1)."""
        ...
