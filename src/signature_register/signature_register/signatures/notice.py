from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_NOTICE_SECONDS
from ..core.enums import NoticeLevel


@dataclass(frozen=True)
class Notice:
    """Message shown to the user for a limited time.

    The ledger only builds the value; clearing it when it expires is up to the UI.
    """

    message: str
    level: NoticeLevel
    created_at: datetime
    ttl_seconds: int = DEFAULT_NOTICE_SECONDS

    @property
    def expires_at(self) -> datetime:
        return self.created_at + timedelta(seconds=self.ttl_seconds)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or now_local()) >= self.expires_at

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "level": self.level.value,
            "expires_at": self.expires_at.isoformat(timespec="seconds"),
        }


def success_notice(first_name: str, last_name: str, *, now: datetime) -> Notice:
    return Notice(
        message=f"Grazie, {first_name} {last_name}. La tua presenza è stata registrata con successo.",
        level=NoticeLevel.SUCCESS,
        created_at=now,
    )


def build_notice(message: str, *, now: datetime, level: NoticeLevel = NoticeLevel.WARNING) -> Notice:
    return Notice(message=message, level=level, created_at=now)
