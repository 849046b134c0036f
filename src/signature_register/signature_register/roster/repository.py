from __future__ import annotations

from typing import Protocol


class RosterRepository(Protocol):
    def contains(self, normalized_email: str) -> bool:
        raise NotImplementedError
