"""Normalize stored signatures of older shapes into ``SignatureRecord``.

Older versions stored a single ``name`` field ("Maria Luisa Bianchi") instead of
separate first/last names. The shape of every stored item is resolved once, at
load time, into a ``StoredShape`` tag; nothing else in the code branches on which
keys a stored item happens to have.

Migration never raises and never drops a signature: items of an unexpected shape
are carried over field by field, even if that leaves them partially canonical.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from ..core.enums import StoredShape
from .model import SignatureRecord


@dataclass(frozen=True)
class MigrationResult:
    records: list[SignatureRecord]
    rewritten: int
    skipped: int = 0


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def classify(raw: Any) -> StoredShape:
    if isinstance(raw, SignatureRecord):
        return StoredShape.CANONICAL
    if not isinstance(raw, Mapping):
        return StoredShape.UNKNOWN
    if _non_empty_str(raw.get("firstName")) and _non_empty_str(raw.get("lastName")):
        return StoredShape.CANONICAL
    if isinstance(raw.get("name"), str) and "lastName" not in raw:
        return StoredShape.LEGACY
    return StoredShape.UNKNOWN


def split_legacy_name(name: str) -> tuple[str, str]:
    """Split on the last whitespace run: everything before is the first name.

    A single token is treated as a surname, since the old list was ordered by
    trailing family name.
    """
    parts = name.strip().rsplit(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return "", parts[0]
    return parts[0], parts[1]


def migrate(raw: Any) -> SignatureRecord:
    shape = classify(raw)

    if isinstance(raw, SignatureRecord):
        return raw

    if shape is StoredShape.LEGACY:
        first_name, last_name = split_legacy_name(raw["name"])
        record = SignatureRecord.from_dict(raw)
        return SignatureRecord(
            first_name=first_name,
            last_name=last_name,
            email=record.email,
            timestamp=record.timestamp,
        )

    # Canonical and unknown mappings copy their fields verbatim.
    return SignatureRecord.from_dict(raw if isinstance(raw, Mapping) else {})


def migrate_all(items: Iterable[Any]) -> MigrationResult:
    records: list[SignatureRecord] = []
    rewritten = 0
    skipped = 0
    for item in items:
        # Not a record at all (e.g. a stray string in the stored list).
        if not isinstance(item, (Mapping, SignatureRecord)):
            skipped += 1
            continue
        if classify(item) is StoredShape.LEGACY:
            rewritten += 1
        records.append(migrate(item))
    return MigrationResult(records=records, rewritten=rewritten, skipped=skipped)
