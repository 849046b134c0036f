from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class SignatureRecord:
    """Entità di dominio (domain): una firma di presenza, una per indirizzo email."""

    first_name: str
    last_name: str
    email: str
    timestamp: str

    @property
    def normalized_email(self) -> str:
        return self.email.strip().lower()

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> dict[str, str]:
        """Storage/JSON shape. camelCase keys keep previously saved data readable."""
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SignatureRecord":
        return cls(
            first_name=_as_text(data.get("firstName")),
            last_name=_as_text(data.get("lastName")),
            email=_as_text(data.get("email")),
            timestamp=_as_text(data.get("timestamp")),
        )


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
