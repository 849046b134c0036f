from __future__ import annotations

import csv
import io
from datetime import date
from typing import Sequence

from ..common.datetime_utils import iso_day
from ..core.constants import EXPORT_FILENAME_PREFIX, EXPORT_HEADER
from ..core.exceptions import EmptyExport
from .model import SignatureRecord


def to_delimited_text(records: Sequence[SignatureRecord]) -> str:
    """Serialize records, in the order given, as CSV text.

    The header row is written bare; every data field is double-quoted with
    embedded quotes doubled. Rows are separated by "\\n" with no trailing newline.
    Raises EmptyExport when there is nothing to write; the caller decides whether
    a header-only file is still wanted (see ``header_only``).
    """
    if not records:
        raise EmptyExport()

    buf = io.StringIO()
    csv.writer(buf, lineterminator="\n").writerow(EXPORT_HEADER)
    rows = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for r in records:
        rows.writerow([r.last_name, r.first_name, r.email, r.timestamp])
    return buf.getvalue().rstrip("\n")


def header_only() -> str:
    return ",".join(EXPORT_HEADER)


def export_filename(day: date) -> str:
    return f"{EXPORT_FILENAME_PREFIX}_{iso_day(day)}.csv"
