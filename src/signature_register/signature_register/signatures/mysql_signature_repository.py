from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import Conflict, NetworkError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SignatureRecord
from .repository import SignatureRepository

logger = logging.getLogger(__name__)

_UNAVAILABLE = "Il servizio delle firme non è raggiungibile. Riprova tra qualche istante."


def _to_record(r: dict) -> SignatureRecord:
    return SignatureRecord(
        first_name=r["first_name"],
        last_name=r["last_name"],
        email=r["email"],
        timestamp=r["signed_at"],
    )


class MySQLSignatureRepository(SignatureRepository):
    """Remote store. ``UNIQUE(email)`` makes check-then-insert atomic server side."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load(self) -> Sequence[Any]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT first_name, last_name, email, signed_at
                    FROM signatures
                    ORDER BY signature_id
                    """
                )
                return [_to_record(r).to_dict() for r in fetchall(cur)]
        except mysql.connector.Error as e:
            logger.error("Loading signatures failed: %s", e)
            raise NetworkError(_UNAVAILABLE) from e

    def get_by_email(self, email: str) -> Optional[SignatureRecord]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT first_name, last_name, email, signed_at
                    FROM signatures
                    WHERE email=%s
                    """,
                    (email.strip().lower(),),
                )
                r = fetchone(cur)
                return _to_record(r) if r else None
        except mysql.connector.Error as e:
            raise NetworkError(_UNAVAILABLE) from e

    def create(self, record: SignatureRecord) -> SignatureRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO signatures(first_name, last_name, email, signed_at)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (record.first_name, record.last_name, record.normalized_email, record.timestamp),
                )
        except mysql.connector.IntegrityError as e:
            if e.errno != errorcode.ER_DUP_ENTRY:
                raise NetworkError(_UNAVAILABLE) from e
            try:
                existing = self.get_by_email(record.normalized_email)
            except NetworkError:
                logger.warning("Could not fetch the signature already stored for %s", record.normalized_email)
                existing = None
            raise Conflict(f"Email già presente: {record.normalized_email}", existing=existing) from e
        except mysql.connector.Error as e:
            logger.error("Creating signature for %s failed: %s", record.normalized_email, e)
            raise NetworkError(_UNAVAILABLE) from e
        return record

    def save_all(self, records: Sequence[SignatureRecord]) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM signatures")
                if records:
                    cur.executemany(
                        """
                        INSERT INTO signatures(first_name, last_name, email, signed_at)
                        VALUES(%s,%s,%s,%s)
                        """,
                        [(r.first_name, r.last_name, r.email, r.timestamp) for r in records],
                    )
        except mysql.connector.Error as e:
            logger.error("Replacing signatures failed: %s", e)
            raise NetworkError(_UNAVAILABLE) from e

    def delete_all(self) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM signatures")
        except mysql.connector.Error as e:
            logger.error("Deleting signatures failed: %s", e)
            raise NetworkError(_UNAVAILABLE) from e
