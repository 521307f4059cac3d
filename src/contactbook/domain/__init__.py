"""Domain layer: the Contact entity. No dependencies on outer layers."""

from contactbook.domain.entities import Contact, is_blank

__all__ = ["Contact", "is_blank"]
