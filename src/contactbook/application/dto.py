"""Outcome DTOs returned by ContactService. Transports map these to responses."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Success:
    payload: Any = None


@dataclass(frozen=True)
class NotFound:
    contact_id: int
    text: str | None = None

    @property
    def message(self) -> str:
        return self.text or f"Contact with ID {self.contact_id} not found."


@dataclass(frozen=True)
class Conflict:
    field: str
    value: str | None = None
    text: str | None = None

    @property
    def message(self) -> str:
        if self.text:
            return self.text
        if self.field == "email":
            return f"A contact with the email '{self.value}' already exists."
        return f"A contact with this {self.field} already exists."


@dataclass(frozen=True)
class InvalidInput:
    reason: str

    @property
    def message(self) -> str:
        return self.reason


@dataclass(frozen=True)
class InternalError:
    message: str


Outcome = Success | NotFound | Conflict | InvalidInput | InternalError
