from __future__ import annotations

from typing import Any, Protocol, Sequence

from .model import SignatureRecord


class SignatureRepository(Protocol):
    """Durable copy of the signature set.

    Implementations raise ``StorageError`` subclasses (``StorageUnavailable``,
    ``NetworkError``) on failure and ``Conflict`` from ``create`` when the email
    is already stored. Emails are compared in normalized form.
    """

    def load(self) -> Sequence[Any]:
        """Raw stored items, possibly of older shapes; the caller migrates them."""

        raise NotImplementedError

    def save_all(self, records: Sequence[SignatureRecord]) -> None:
        """Replace the whole stored set."""

        raise NotImplementedError

    def create(self, record: SignatureRecord) -> SignatureRecord:
        raise NotImplementedError

    def delete_all(self) -> None:
        raise NotImplementedError
