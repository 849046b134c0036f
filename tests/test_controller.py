from __future__ import annotations

import json
from datetime import datetime

import pytest

from src.signature_register.signature_register.main import create_app

MARIO = {"first_name": "Mario", "last_name": "Rossi", "email": "Mario.Rossi@cine-tv.edu.it"}


@pytest.fixture
def make_app(tmp_path, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    def _make(**overrides):
        settings = {"DATA_DIR": str(tmp_path), "STORAGE_BACKEND": "local", "LOG_LEVEL": "WARNING"}
        settings.update(overrides)
        app = create_app(settings)
        app.config["TESTING"] = True
        return app

    return _make


@pytest.fixture
def client(make_app):
    return make_app().test_client()


def test_sign_and_list(client):
    resp = client.post("/signatures", json=MARIO)

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["signature"]["email"] == "mario.rossi@cine-tv.edu.it"
    assert body["notice"]["message"].startswith("Grazie, Mario Rossi.")
    assert body["notice"]["level"] == "success"

    listing = client.get("/signatures").get_json()
    assert listing["count"] == 1
    assert listing["is_admin"] is False
    assert listing["signatures"][0]["lastName"] == "Rossi"


def test_sign_with_form_data(client):
    resp = client.post("/signatures", data=MARIO)

    assert resp.status_code == 201


def test_duplicate_signature_is_409(client):
    client.post("/signatures", json=MARIO)

    resp = client.post("/signatures", json={**MARIO, "email": "MARIO.ROSSI@CINE-TV.EDU.IT"})

    assert resp.status_code == 409
    body = resp.get_json()
    assert body["error"] == "DuplicateEmail"
    assert body["existing"]["lastName"] == "Rossi"
    assert "Ogni docente può firmare una sola volta." in body["notice"]["message"]


def test_invalid_input_is_400_and_echoed_back(client):
    resp = client.post("/signatures", json={**MARIO, "email": "mario@gmail.com"})

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "InvalidEmailDomain"
    assert body["input"]["email"] == "mario@gmail.com"
    assert client.get("/signatures").get_json()["count"] == 0


def test_list_is_sorted_by_query(client):
    client.post("/signatures", json=MARIO)
    client.post("/signatures", json={"first_name": "Anna", "last_name": "Bianchi", "email": "anna.bianchi@cine-tv.edu.it"})

    default = client.get("/").get_json()
    assert [s["lastName"] for s in default["signatures"]] == ["Bianchi", "Rossi"]

    by_first_desc = client.get("/signatures?sort=first_name&direction=desc").get_json()
    assert [s["firstName"] for s in by_first_desc["signatures"]] == ["Mario", "Anna"]
    assert by_first_desc["sort"] == {"key": "first_name", "direction": "desc"}

    assert client.get("/signatures?sort=name").status_code == 400


def test_export_requires_admin(client):
    client.post("/signatures", json=MARIO)

    assert client.get("/signatures/export.csv").status_code == 403


def test_export_csv(client):
    client.post("/signatures", json=MARIO)

    resp = client.get("/signatures/export.csv?admin=true")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "firme_collegio_docenti_" in resp.headers["Content-Disposition"]
    lines = resp.data.decode("utf-8-sig").split("\n")
    assert lines[0] == "Cognome,Nome,Email,Data e Ora della Firma"
    assert lines[1].startswith('"Rossi","Mario","mario.rossi@cine-tv.edu.it",')


def test_empty_export(client):
    resp = client.get("/signatures/export.csv?admin=true")
    assert resp.status_code == 404
    assert resp.get_json()["notice"]["message"] == "Nessuna firma da esportare."

    resp = client.get("/signatures/export.csv?admin=true&allow_empty=true")
    assert resp.status_code == 200
    assert resp.data.decode("utf-8-sig") == "Cognome,Nome,Email,Data e Ora della Firma"


def test_reset_needs_admin_and_confirmation(client):
    client.post("/signatures", json=MARIO)

    assert client.post("/signatures/reset", json={"confirm": True}).status_code == 403
    assert client.post("/signatures/reset?admin=true", json={}).status_code == 400
    assert client.get("/signatures").get_json()["count"] == 1

    resp = client.post("/signatures/reset?admin=true", json={"confirm": True})
    assert resp.status_code == 200
    assert client.get("/signatures").get_json()["count"] == 0

    assert client.post("/signatures", json=MARIO).status_code == 201


def test_startup_migrates_legacy_store(make_app, tmp_path):
    store = tmp_path / "collegio-docenti-signatures.json"
    store.write_text(
        json.dumps([{"name": "Maria Luisa Bianchi", "email": "m.bianchi@cine-tv.edu.it", "timestamp": "01/09/25, 10:00:00"}]),
        encoding="utf-8",
    )

    client = make_app().test_client()

    signatures = client.get("/signatures").get_json()["signatures"]
    assert signatures == [
        {"firstName": "Maria Luisa", "lastName": "Bianchi", "email": "m.bianchi@cine-tv.edu.it", "timestamp": "01/09/25, 10:00:00"}
    ]
    assert json.loads(store.read_text(encoding="utf-8")) == signatures


def test_startup_survives_corrupt_store(make_app, tmp_path):
    (tmp_path / "collegio-docenti-signatures.json").write_text("{broken", encoding="utf-8")

    client = make_app().test_client()

    assert client.get("/signatures").get_json()["count"] == 0


def test_roster_policy_from_settings(make_app, tmp_path):
    roster = tmp_path / "docenti.txt"
    roster.write_text("anna.bianchi@cine-tv.edu.it\n", encoding="utf-8")
    client = make_app(ROSTER_PATH=str(roster)).test_client()

    resp = client.post("/signatures", json=MARIO)

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "NotInRoster"


def test_admin_flag_is_remembered_in_session(client):
    client.post("/signatures", json=MARIO)

    assert client.get("/signatures?admin=true").get_json()["is_admin"] is True
    assert client.get("/signatures").get_json()["is_admin"] is True
    assert client.get("/signatures/export.csv").status_code == 200

    assert client.get("/signatures?admin=false").get_json()["is_admin"] is False
    assert client.get("/signatures/export.csv").status_code == 403


def test_export_filename_uses_local_clock(client, monkeypatch):
    from src.signature_register.signature_register.signatures import controller

    monkeypatch.setattr(controller, "now_local", lambda: datetime(2026, 10, 19, 8, 30, 0))
    client.post("/signatures", json=MARIO)

    resp = client.get("/signatures/export.csv?admin=true")

    assert "firme_collegio_docenti_2026-10-19.csv" in resp.headers["Content-Disposition"]


def test_list_reports_next_header_sort(client):
    body = client.get("/signatures?sort=last_name&direction=asc").get_json()

    assert body["next_sort"] == {"last_name": "desc", "first_name": "asc", "email": "asc", "timestamp": "asc"}
