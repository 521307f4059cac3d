"""In-memory implementation of ContactRepository (no DB)."""

from contactbook.application.ports import ConstraintViolation
from contactbook.domain import Contact


def _sort_key(contact: Contact) -> tuple[str, str, int]:
    return (contact.last_name, contact.first_name, contact.id or 0)


class InMemoryContactRepository:
    """Stores contacts in a dict keyed by id. Ids start at 1 and are never reused.
    Non-null emails are unique, like the UNIQUE column of the SQL store.
    """

    def __init__(self) -> None:
        self._by_id: dict[int, Contact] = {}
        self._next_id = 1

    def _check_email(self, email: str | None, *, exclude_id: int | None = None) -> None:
        if email is None:
            return
        for contact in self._by_id.values():
            if contact.id != exclude_id and contact.email == email:
                raise ConstraintViolation("email", email)

    def list_all(self) -> list[Contact]:
        return sorted(self._by_id.values(), key=_sort_key)

    def get_by_id(self, contact_id: int) -> Contact | None:
        return self._by_id.get(contact_id)

    def insert(self, contact: Contact) -> int:
        self._check_email(contact.email)
        new_id = self._next_id
        self._next_id += 1
        self._by_id[new_id] = contact.with_id(new_id)
        return new_id

    def update_by_id(self, contact_id: int, contact: Contact) -> int:
        if contact_id not in self._by_id:
            return 0
        self._check_email(contact.email, exclude_id=contact_id)
        self._by_id[contact_id] = contact.with_id(contact_id)
        return 1

    def delete_by_id(self, contact_id: int) -> int:
        return 1 if self._by_id.pop(contact_id, None) is not None else 0
