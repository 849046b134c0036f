from __future__ import annotations

from datetime import date, datetime

from ..core.constants import TIMESTAMP_FORMAT


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def format_signature_timestamp(value: datetime) -> str:
    """Format a capture time the way it-IT renders dateStyle=short, timeStyle=medium."""
    return value.strftime(TIMESTAMP_FORMAT)


def iso_day(value: date) -> str:
    return value.strftime("%Y-%m-%d")
