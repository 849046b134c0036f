from __future__ import annotations

import mysql.connector
import pytest

from src.signature_register.signature_register.core.exceptions import Conflict, NetworkError
from src.signature_register.signature_register.signatures.model import SignatureRecord
from src.signature_register.signature_register.signatures.mysql_signature_repository import MySQLSignatureRepository


class FakeCursor:
    def __init__(self, db: "FakeDB"):
        self._db = db
        self._result: list[dict] = []

    def execute(self, sql, params=None):
        sql = " ".join(sql.split())
        self._db.statements.append((sql, params))
        if sql.startswith("INSERT"):
            email = params[2]
            if any(r["email"] == email for r in self._db.rows):
                raise mysql.connector.IntegrityError(msg="Duplicate entry", errno=1062)
            self._db.pending.append(
                {"first_name": params[0], "last_name": params[1], "email": email, "signed_at": params[3]}
            )
        elif sql.startswith("DELETE"):
            self._db.pending_delete = True
        elif sql.startswith("SELECT"):
            if params:
                self._result = [r for r in self._db.rows if r["email"] == params[0]]
            else:
                self._result = list(self._db.rows)

    def executemany(self, sql, seq):
        for params in seq:
            self.execute(sql, params)

    def fetchone(self):
        return self._result[0] if self._result else None

    def fetchall(self):
        return list(self._result)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, db: "FakeDB"):
        self._db = db

    def cursor(self, dictionary=False):
        return FakeCursor(self._db)

    def commit(self):
        if self._db.pending_delete:
            self._db.rows = []
        self._db.rows.extend(self._db.pending)
        self._db.reset_pending()
        self._db.commits += 1

    def rollback(self):
        self._db.reset_pending()
        self._db.rollbacks += 1

    def close(self):
        pass


class FakeDB:
    """Connection factory standing in for DatabaseConnection."""

    def __init__(self, rows=None):
        self.rows: list[dict] = list(rows or [])
        self.statements: list = []
        self.commits = 0
        self.rollbacks = 0
        self.down = False
        self.reset_pending()

    def reset_pending(self):
        self.pending: list[dict] = []
        self.pending_delete = False

    def connect(self):
        if self.down:
            raise mysql.connector.errors.InterfaceError(msg="Can't connect to MySQL server")
        return FakeConnection(self)


ROSSI = {"first_name": "Mario", "last_name": "Rossi", "email": "mario.rossi@cine-tv.edu.it", "signed_at": "19/10/26, 08:30:00"}


def test_load_returns_storage_shape():
    repo = MySQLSignatureRepository(FakeDB([ROSSI]))

    assert repo.load() == [
        {"firstName": "Mario", "lastName": "Rossi", "email": "mario.rossi@cine-tv.edu.it", "timestamp": "19/10/26, 08:30:00"}
    ]


def test_create_inserts_normalized_email_and_commits():
    db = FakeDB()
    repo = MySQLSignatureRepository(db)

    repo.create(SignatureRecord("Anna", "Verdi", "Anna.Verdi@cine-tv.edu.it", "t"))

    assert db.rows[0]["email"] == "anna.verdi@cine-tv.edu.it"
    assert db.commits == 1


def test_duplicate_key_becomes_conflict_with_existing_record():
    db = FakeDB([ROSSI])
    repo = MySQLSignatureRepository(db)

    with pytest.raises(Conflict) as exc:
        repo.create(SignatureRecord("Mario", "Rossi", "mario.rossi@cine-tv.edu.it", "later"))

    assert exc.value.existing == SignatureRecord("Mario", "Rossi", "mario.rossi@cine-tv.edu.it", "19/10/26, 08:30:00")
    assert db.rollbacks == 1
    assert len(db.rows) == 1


def test_unreachable_server_is_a_network_error():
    db = FakeDB()
    db.down = True
    repo = MySQLSignatureRepository(db)

    with pytest.raises(NetworkError):
        repo.load()
    with pytest.raises(NetworkError):
        repo.create(SignatureRecord("Anna", "Verdi", "anna.verdi@cine-tv.edu.it", "t"))
    with pytest.raises(NetworkError):
        repo.delete_all()


def test_save_all_replaces_rows_and_delete_all_clears():
    db = FakeDB([ROSSI])
    repo = MySQLSignatureRepository(db)

    repo.save_all([SignatureRecord("Anna", "Verdi", "anna.verdi@cine-tv.edu.it", "t")])
    assert [r["last_name"] for r in db.rows] == ["Verdi"]

    repo.delete_all()
    assert db.rows == []


class LookupFailsDB(FakeDB):
    """Insert hits the unique key, then the server drops before the lookup."""

    def __init__(self, rows):
        super().__init__(rows)
        self.connects = 0

    def connect(self):
        self.connects += 1
        if self.connects > 1:
            raise mysql.connector.errors.InterfaceError(msg="Lost connection to MySQL server")
        return FakeConnection(self)


def test_duplicate_still_conflicts_when_lookup_fails():
    repo = MySQLSignatureRepository(LookupFailsDB([ROSSI]))

    with pytest.raises(Conflict) as exc:
        repo.create(SignatureRecord("Mario", "Rossi", "mario.rossi@cine-tv.edu.it", "later"))

    assert exc.value.existing is None
