from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Iterable, Optional

from ..core.enums import SortDirection, SortKey
from .model import SignatureRecord

# Secondary key used when two records tie on a name column. Always ascending.
_NAME_TIE_BREAK = {
    SortKey.LAST_NAME: SortKey.FIRST_NAME,
    SortKey.FIRST_NAME: SortKey.LAST_NAME,
}


@dataclass(frozen=True)
class SortConfig:
    key: SortKey = SortKey.LAST_NAME
    direction: SortDirection = SortDirection.ASCENDING


def collation_key(value: str) -> tuple[str, str, str]:
    """Locale-style key: letters first, then accents, then case.

    "Èrica", "erica" and "Erica" share the same primary key, so they sit next to
    each other instead of after "Z" as a plain code point comparison would do.
    """
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return base, value.casefold(), value


def compare_text(a: str, b: str) -> int:
    ka, kb = collation_key(a), collation_key(b)
    return (ka > kb) - (ka < kb)


def _field(record: SignatureRecord, key: SortKey) -> str:
    return getattr(record, key.value)


def order(
    records: Iterable[SignatureRecord],
    key: SortKey = SortKey.LAST_NAME,
    direction: SortDirection = SortDirection.ASCENDING,
) -> list[SignatureRecord]:
    """Return a new ordered list; the input is left untouched.

    Ties on last name break on first name (and vice versa) in ascending order
    whatever the direction. Other keys keep insertion order for ties.
    """
    key = SortKey(key)
    direction = SortDirection(direction)
    sign = -1 if direction is SortDirection.DESCENDING else 1
    tie_key = _NAME_TIE_BREAK.get(key)

    def _cmp(a: SignatureRecord, b: SignatureRecord) -> int:
        primary = compare_text(_field(a, key), _field(b, key)) * sign
        if primary or tie_key is None:
            return primary
        return compare_text(_field(a, tie_key), _field(b, tie_key))

    return sorted(records, key=cmp_to_key(_cmp))


def next_sort(current: Optional[SortConfig], key: SortKey) -> SortConfig:
    """Header click rule: same column ascending flips to descending, anything else sorts ascending."""
    key = SortKey(key)
    if current and current.key is key and current.direction is SortDirection.ASCENDING:
        return SortConfig(key=key, direction=SortDirection.DESCENDING)
    return SortConfig(key=key, direction=SortDirection.ASCENDING)
