from __future__ import annotations

from enum import Enum


class SortKey(str, Enum):
    """Colonne ordinabili dell'elenco presenze."""

    LAST_NAME = "last_name"
    FIRST_NAME = "first_name"
    EMAIL = "email"
    TIMESTAMP = "timestamp"


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


class StoredShape(str, Enum):
    """Forma di un elemento letto dallo storage, risolta una sola volta al caricamento."""

    CANONICAL = "CANONICAL"
    LEGACY = "LEGACY"
    UNKNOWN = "UNKNOWN"


class StorageBackend(str, Enum):
    LOCAL = "local"
    MYSQL = "mysql"


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"
