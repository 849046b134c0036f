from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .common.validators import SignatureValidator
from .core.constants import DEFAULT_EMAIL_DOMAIN
from .core.enums import StorageBackend
from .database.connection import DatabaseConnection, DBConfig
from .roster.file_roster import FileRoster
from .roster.repository import RosterRepository
from .signatures.local_signature_repository import LocalSignatureRepository
from .signatures.mysql_signature_repository import MySQLSignatureRepository
from .signatures.repository import SignatureRepository
from .signatures.service import SignatureLedger


@dataclass(frozen=True)
class Container:
    signatures_repo: SignatureRepository
    roster: Optional[RosterRepository]

    validator: SignatureValidator
    ledger: SignatureLedger


def build_repository(*, backend: str, data_dir: str | None = None, db_config: dict | None = None) -> SignatureRepository:
    backend = StorageBackend(str(backend).lower())
    if backend is StorageBackend.MYSQL:
        if not db_config:
            raise ValueError("STORAGE_BACKEND=mysql requires DB_CONFIG")
        return MySQLSignatureRepository(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)))
    if not data_dir:
        raise ValueError("STORAGE_BACKEND=local requires DATA_DIR")
    return LocalSignatureRepository(data_dir)


def build_container(
    *,
    backend: str = StorageBackend.LOCAL.value,
    data_dir: str | None = None,
    db_config: dict | None = None,
    email_domain: str = DEFAULT_EMAIL_DOMAIN,
    roster_path: str | None = None,
    repository: SignatureRepository | None = None,
) -> Container:
    signatures_repo = repository or build_repository(backend=backend, data_dir=data_dir, db_config=db_config)
    roster = FileRoster(roster_path) if roster_path else None

    validator = SignatureValidator(email_domain, roster=roster)
    ledger = SignatureLedger(signatures_repo, validator)

    return Container(
        signatures_repo=signatures_repo,
        roster=roster,
        validator=validator,
        ledger=ledger,
    )
