from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.logger import setup_logger
from .container import build_container
from .core.constants import DEFAULT_EMAIL_DOMAIN
from .core.enums import StorageBackend
from .core.exceptions import StorageError
from .database.bootstrap import apply_schema, list_tables
from .signatures.controller import register as register_signatures

logger = logging.getLogger(__name__)

SETTING_NAMES = (
    "SECRET_KEY",
    "DEBUG",
    "STORAGE_BACKEND",
    "DATA_DIR",
    "DB_CONFIG",
    "EMAIL_DOMAIN",
    "ROSTER_PATH",
    "LOG_LEVEL",
    "AUTO_INIT_DB",
)


def load_settings(overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    values = {name: getattr(settings, name, None) for name in SETTING_NAMES}
    values["SETTINGS_MODULE"] = settings_module
    values.update(overrides or {})
    return values


def create_app(overrides: Optional[dict[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings = load_settings(overrides)
    setup_logger(level=settings.get("LOG_LEVEL") or "INFO")

    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))

    backend = str(settings.get("STORAGE_BACKEND") or StorageBackend.LOCAL.value)
    db_config = settings.get("DB_CONFIG") or {}
    logger.info("settings=%s backend=%s", settings["SETTINGS_MODULE"], backend)

    if backend == StorageBackend.MYSQL.value and settings.get("AUTO_INIT_DB"):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        backend=backend,
        data_dir=settings.get("DATA_DIR"),
        db_config=db_config,
        email_domain=settings.get("EMAIL_DOMAIN") or DEFAULT_EMAIL_DOMAIN,
        roster_path=settings.get("ROSTER_PATH"),
    )

    # An unreachable store leaves the register empty; inserts still go through the store.
    try:
        container.ledger.load()
    except StorageError as e:
        logger.error("Could not load stored signatures: %s", e)

    register_signatures(app, container)
    app.extensions["signature_register"] = container

    return app
