"""Contact use cases: validation and translation of store results into outcomes."""

import logging
from dataclasses import replace

from contactbook.application.dto import (
    Conflict,
    InternalError,
    InvalidInput,
    NotFound,
    Success,
)
from contactbook.application.ports import ConstraintViolation, ContactRepository
from contactbook.domain import Contact, is_blank

logger = logging.getLogger(__name__)

NAMES_REQUIRED = "First Name and Last Name are required."
ID_MISMATCH = "ID mismatch between route parameter and contact payload."


class ContactService:
    """Stateless CRUD over a ContactRepository. Every call goes to the store."""

    def __init__(self, repository: ContactRepository) -> None:
        self._repo = repository

    def list(self) -> Success | InternalError:
        """Return all contacts (possibly none)."""
        try:
            contacts = self._repo.list_all()
        except Exception:
            logger.exception("An error occurred while retrieving contacts.")
            return InternalError(
                "An internal server error occurred while retrieving contacts."
            )
        logger.info("Retrieved %d contacts.", len(contacts))
        return Success(contacts)

    def get(self, contact_id: int) -> Success | NotFound | InternalError:
        """Return a contact by id."""
        try:
            contact = self._repo.get_by_id(contact_id)
        except Exception:
            logger.exception(
                "An error occurred while retrieving contact with ID %s.", contact_id
            )
            return InternalError(
                f"An internal server error occurred while retrieving contact {contact_id}."
            )
        if contact is None:
            logger.warning(
                "Attempted to retrieve non-existent contact with ID %s.", contact_id
            )
            return NotFound(contact_id=contact_id)
        logger.info("Retrieved contact with ID %s.", contact_id)
        return Success(contact)

    def create(
        self, candidate: Contact
    ) -> Success | InvalidInput | Conflict | InternalError:
        """Store a new contact. Any id on the candidate is ignored."""
        if is_blank(candidate.first_name) or is_blank(candidate.last_name):
            logger.warning("Create contact attempt failed due to missing required fields.")
            return InvalidInput(reason=NAMES_REQUIRED)

        candidate = replace(candidate, id=None)
        try:
            new_id = self._repo.insert(candidate)
        except ConstraintViolation as exc:
            logger.warning(
                "Create contact attempt failed due to duplicate %s %r.",
                exc.field,
                candidate.email,
            )
            return Conflict(field=exc.field, value=candidate.email)
        except Exception:
            logger.exception("An error occurred while creating a new contact.")
            return InternalError(
                "An internal server error occurred while creating the contact."
            )
        logger.info("Created new contact with ID %s.", new_id)
        return Success(candidate.with_id(new_id))

    def update(
        self, contact_id: int, replacement: Contact
    ) -> Success | InvalidInput | NotFound | Conflict | InternalError:
        """Replace all fields of an existing contact except its id."""
        if replacement.id != contact_id:
            logger.warning(
                "Update contact attempt failed for route ID %s: payload ID mismatch (%s).",
                contact_id,
                replacement.id,
            )
            return InvalidInput(reason=ID_MISMATCH)
        if is_blank(replacement.first_name) or is_blank(replacement.last_name):
            logger.warning(
                "Update contact attempt for ID %s failed due to missing required fields.",
                contact_id,
            )
            return InvalidInput(reason=NAMES_REQUIRED)

        try:
            if self._repo.get_by_id(contact_id) is None:
                logger.warning(
                    "Update contact attempt failed: contact with ID %s not found.",
                    contact_id,
                )
                return NotFound(
                    contact_id=contact_id,
                    text=f"Contact with ID {contact_id} not found for update.",
                )
            # Not transactional with the check above: a concurrent delete
            # leaves this at 0 rows and the update still reports success.
            affected = self._repo.update_by_id(contact_id, replacement)
        except ConstraintViolation as exc:
            logger.warning(
                "Update contact attempt for ID %s failed due to duplicate %s %r.",
                contact_id,
                exc.field,
                replacement.email,
            )
            return Conflict(
                field=exc.field,
                value=replacement.email,
                text=(
                    f"Cannot update contact, the email '{replacement.email}' "
                    "is already in use by another contact."
                ),
            )
        except Exception:
            logger.exception(
                "An error occurred while updating contact with ID %s.", contact_id
            )
            return InternalError(
                f"An internal server error occurred while updating contact {contact_id}."
            )
        if affected == 0:
            logger.warning(
                "Update for contact ID %s reported no rows affected.", contact_id
            )
        logger.info("Updated contact with ID %s.", contact_id)
        return Success()

    def delete(self, contact_id: int) -> Success | NotFound | InternalError:
        """Remove a contact by id."""
        try:
            affected = self._repo.delete_by_id(contact_id)
        except Exception:
            logger.exception(
                "An error occurred while deleting contact with ID %s.", contact_id
            )
            return InternalError(
                f"An internal server error occurred while deleting contact {contact_id}."
            )
        if not affected:
            logger.warning(
                "Delete contact attempt failed: contact with ID %s not found.",
                contact_id,
            )
            return NotFound(
                contact_id=contact_id,
                text=f"Contact with ID {contact_id} not found for deletion.",
            )
        logger.info("Deleted contact with ID %s.", contact_id)
        return Success()
