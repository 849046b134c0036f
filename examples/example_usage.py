"""Example: use the ledger directly (without Flask).

Controllers are a thin layer; the business rules live in the ledger and its helpers.
"""

import importlib

from config import get_settings_module

from src.signature_register.signature_register.container import build_container
from src.signature_register.signature_register.core.enums import SortDirection, SortKey
from src.signature_register.signature_register.core.exceptions import DomainError


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        backend=settings.STORAGE_BACKEND,
        data_dir=settings.DATA_DIR,
        db_config=settings.DB_CONFIG,
        email_domain=settings.EMAIL_DOMAIN,
    )
    ledger = container.ledger
    ledger.load()

    try:
        ledger.insert("Mario", "Rossi", "Mario.Rossi@cine-tv.edu.it")
    except DomainError as e:
        print(e)

    for r in ledger.ordered(SortKey.LAST_NAME, SortDirection.ASCENDING):
        print(f"{r.last_name:<20} {r.first_name:<20} {r.email:<35} {r.timestamp}")

    print(ledger.export())


if __name__ == "__main__":
    main()
