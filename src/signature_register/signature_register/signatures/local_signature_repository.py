from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Sequence

from ..core.constants import SIGNATURES_STORAGE_KEY
from ..core.exceptions import Conflict, StorageUnavailable
from .model import SignatureRecord
from .repository import SignatureRepository

logger = logging.getLogger(__name__)


class LocalSignatureRepository(SignatureRepository):
    """Key-value store on the local disk: one JSON document per storage key.

    The document is a JSON array of signature objects, the same payload the
    browser version kept under ``collegio-docenti-signatures``.
    """

    def __init__(self, data_dir: str | Path, *, storage_key: str = SIGNATURES_STORAGE_KEY):
        self._path = Path(data_dir) / f"{storage_key}.json"

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Sequence[Any]:
        if not self._path.exists():
            return []
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, ValueError) as e:
            logger.error("Failed to read signatures from %s: %s", self._path, e)
            raise StorageUnavailable("Impossibile caricare le firme salvate.") from e

        if not isinstance(data, list):
            raise StorageUnavailable("Impossibile caricare le firme salvate.")
        return data

    def save_all(self, records: Sequence[SignatureRecord]) -> None:
        self._write([r.to_dict() for r in records])

    def create(self, record: SignatureRecord) -> SignatureRecord:
        items = list(self.load())
        key = record.normalized_email
        for item in items:
            if isinstance(item, dict) and str(item.get("email") or "").strip().lower() == key:
                raise Conflict(
                    f"Email già presente: {key}",
                    existing=SignatureRecord.from_dict(item),
                )
        items.append(record.to_dict())
        self._write(items)
        return record

    def delete_all(self) -> None:
        self._write([])

    def _write(self, payload: list) -> None:
        # Atomic replace: the store is never left half-written.
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=".signatures-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(payload, handle, ensure_ascii=False, indent=2)
                os.replace(tmp, self._path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error("Failed to write signatures to %s: %s", self._path, e)
            raise StorageUnavailable("Impossibile salvare la tua firma. Riprova.") from e
