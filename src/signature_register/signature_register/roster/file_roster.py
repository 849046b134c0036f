from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable

from ..core.exceptions import StorageUnavailable
from .repository import RosterRepository

logger = logging.getLogger(__name__)


class StaticRoster(RosterRepository):
    """Allow-list fixed at construction time."""

    def __init__(self, emails: Iterable[str]):
        self._emails = frozenset(e.strip().lower() for e in emails if e and e.strip())

    def __len__(self) -> int:
        return len(self._emails)

    def contains(self, normalized_email: str) -> bool:
        return normalized_email in self._emails


class FileRoster(StaticRoster):
    """Allow-list loaded once from a text or CSV file.

    Accepted layouts:
    - one email per line (blank lines and lines starting with '#' ignored)
    - CSV with a header row containing an ``email`` column (case-insensitive)
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        super().__init__(self._read_emails(self.path))
        logger.info("Roster loaded from %s (%d emails)", self.path, len(self))

    @staticmethod
    def _read_emails(path: Path) -> list[str]:
        try:
            text = path.read_text(encoding="utf-8-sig")
        except OSError as e:
            raise StorageUnavailable(f"Impossibile leggere l'elenco docenti: {path}") from e

        lines = [ln for ln in text.splitlines() if ln.strip() and not ln.lstrip().startswith("#")]
        if not lines:
            return []

        header = [h.strip().lower() for h in next(csv.reader([lines[0]]))]
        if "email" not in header:
            return [ln.strip() for ln in lines]

        col = header.index("email")
        emails: list[str] = []
        for row in csv.reader(lines[1:]):
            if len(row) > col:
                emails.append(row[col])
        return emails
