"""Domain entity: Contact."""

from dataclasses import dataclass, replace


def is_blank(value: str | None) -> bool:
    """True for None, empty or whitespace-only strings."""
    return value is None or not value.strip()


@dataclass(frozen=True)
class Contact:
    """
    A person in the address book.
    id is assigned by the store on creation; None means not yet persisted.
    email and phone keep None distinct from the empty string.
    """

    first_name: str = ""
    last_name: str = ""
    email: str | None = None
    phone: str | None = None
    id: int | None = None

    def with_id(self, new_id: int) -> "Contact":
        return replace(self, id=new_id)
