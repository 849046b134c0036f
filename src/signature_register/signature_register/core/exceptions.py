from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..signatures.model import SignatureRecord


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class MissingField(ValidationError):
    """A required field is empty after trimming."""


class InvalidNameFormat(ValidationError):
    """A name contains characters other than letters, spaces and apostrophes."""


class InvalidEmailDomain(ValidationError):
    """The email does not belong to the institutional domain."""


class NotInRoster(ValidationError):
    """The email is not on the roster of eligible signers."""


class DuplicateEmail(DomainError):
    """The email has already been used to sign.

    Carries the existing record so the caller can say who signed and when.
    """

    def __init__(self, existing: "SignatureRecord"):
        self.existing = existing
        super().__init__(
            "Questo indirizzo email risulta già utilizzato da "
            f"{existing.last_name} {existing.first_name} in data {existing.timestamp}. "
            "Ogni docente può firmare una sola volta."
        )


class EmptyExport(DomainError):
    """There is nothing to export."""

    def __init__(self, message: str = "Nessuna firma da esportare."):
        super().__init__(message)


class AuthorizationError(DomainError):
    """Raised when the caller lacks the elevated privilege for an action."""


class StorageError(DomainError):
    """Base class for persistence adapter failures. Recoverable by retry."""


class StorageUnavailable(StorageError):
    """The local store could not be read or written."""


class NetworkError(StorageError):
    """The remote store could not be reached or returned an error."""


class Conflict(StorageError):
    """The remote store rejected a record because its email already exists."""

    def __init__(self, message: str, *, existing: Optional["SignatureRecord"] = None):
        self.existing = existing
        super().__init__(message)
