from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_signature_timestamp, now_local
from ..common.validators import SignatureValidator, normalize_email
from ..core.enums import SortDirection, SortKey
from ..core.exceptions import AuthorizationError, Conflict, DuplicateEmail, StorageError
from .exporter import to_delimited_text
from .migration import migrate_all
from .model import SignatureRecord
from .repository import SignatureRepository
from .sorter import order

logger = logging.getLogger(__name__)


class SignatureLedger:
    """Live set of signatures, one per normalized email.

    The repository holds the durable copy; this object holds the in-memory view
    and only changes it after the repository call succeeded, so a failed call
    leaves the ledger as it was.
    """

    def __init__(self, repository: SignatureRepository, validator: SignatureValidator):
        self._repository = repository
        self._validator = validator
        self._records: list[SignatureRecord] = []
        self._lock = threading.Lock()

    @property
    def count(self) -> int:
        return len(self._records)

    def load(self) -> list[SignatureRecord]:
        """Replace the live set with the stored one, migrating older record shapes.

        Migrated records are written back so legacy shapes are not read again.
        When several stored items share an email only the first is kept.
        A failed write-back is logged; the records read are still used.
        """
        with self._lock:
            result = migrate_all(self._repository.load())
            if result.skipped:
                logger.warning("Skipped %d stored items that are not signatures", result.skipped)

            records: list[SignatureRecord] = []
            seen: set[str] = set()
            for r in result.records:
                if r.normalized_email in seen:
                    logger.warning("Dropped duplicate stored signature for %s", r.normalized_email)
                    continue
                seen.add(r.normalized_email)
                records.append(r)
            dropped = len(result.records) - len(records)

            self._records = records
            if result.rewritten or dropped:
                try:
                    self._repository.save_all(records)
                    logger.info("Rewrote store: %d migrated, %d duplicates dropped", result.rewritten, dropped)
                except StorageError as e:
                    logger.warning("Could not rewrite the signature store: %s", e)
            logger.info("Loaded %d signatures", len(self._records))
            return list(self._records)

    def find_by_email(self, email: str) -> Optional[SignatureRecord]:
        key = normalize_email(email)
        for r in self._records:
            if r.normalized_email == key:
                return r
        return None

    def insert(
        self,
        first_name: str,
        last_name: str,
        email: str,
        *,
        now: datetime | None = None,
    ) -> SignatureRecord:
        data = self._validator.validate(first_name, last_name, email)

        with self._lock:
            existing = self.find_by_email(data.email)
            if existing:
                raise DuplicateEmail(existing)

            record = SignatureRecord(
                first_name=data.first_name,
                last_name=data.last_name,
                email=data.email,
                timestamp=format_signature_timestamp(now or now_local()),
            )
            try:
                stored = self._repository.create(record)
            except Conflict as e:
                # Someone else signed with this email first; adopt their record if the store returned it.
                if e.existing is not None and self.find_by_email(e.existing.email) is None:
                    self._records.append(e.existing)
                existing = e.existing or record
                logger.info("Store reported %s as already signed", data.email)
                raise DuplicateEmail(existing) from e

            self._records.append(stored)
            logger.info("Signature recorded for %s", stored.email)
            return stored

    def list(self) -> list[SignatureRecord]:
        return list(self._records)

    def ordered(
        self,
        key: SortKey = SortKey.LAST_NAME,
        direction: SortDirection = SortDirection.ASCENDING,
    ) -> list[SignatureRecord]:
        return order(self._records, key, direction)

    def export(
        self,
        key: SortKey = SortKey.LAST_NAME,
        direction: SortDirection = SortDirection.ASCENDING,
    ) -> str:
        """CSV of the current view. Raises EmptyExport when there are no signatures."""
        return to_delimited_text(self.ordered(key, direction))

    def reset(self, *, privileged: bool) -> None:
        """Delete every signature. The "are you sure?" step belongs to the caller."""
        if not privileged:
            raise AuthorizationError("Operazione riservata all'amministratore.")

        with self._lock:
            self._repository.delete_all()
            cleared = len(self._records)
            self._records = []
        logger.warning("Ledger reset: %d signatures deleted", cleared)
