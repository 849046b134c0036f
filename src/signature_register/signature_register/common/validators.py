from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_EMAIL_DOMAIN
from ..core.exceptions import InvalidEmailDomain, InvalidNameFormat, MissingField, NotInRoster
from ..roster.repository import RosterRepository

# Unicode letters (accented included), whitespace and apostrophes; digits and "_" excluded.
NAME_PATTERN = re.compile(r"^(?:[^\W\d_]|\s|['’])+$")


def normalize_email(value: str) -> str:
    return (value or "").strip().lower()


def require_non_empty(value: str, message: str) -> str:
    if not value or not value.strip():
        raise MissingField(message)
    return value.strip()


def is_valid_name(value: str) -> bool:
    return bool(NAME_PATTERN.match(value))


@dataclass(frozen=True)
class ValidatedSignature:
    first_name: str
    last_name: str
    email: str


class SignatureValidator:
    """Checks a signing request and returns its normalized values.

    Pure: no state is touched, so the same input always gives the same result.
    The roster policy is active only when a roster is supplied.
    """

    def __init__(self, email_domain: str = DEFAULT_EMAIL_DOMAIN, *, roster: Optional[RosterRepository] = None):
        self._email_domain = email_domain.strip().lower()
        self._roster = roster

    @property
    def email_domain(self) -> str:
        return self._email_domain

    def validate(self, first_name: str, last_name: str, email: str) -> ValidatedSignature:
        if not (first_name or "").strip() or not (last_name or "").strip():
            raise MissingField("I campi 'Nome' e 'Cognome' sono obbligatori.")
        first = unicodedata.normalize("NFC", first_name.strip())
        last = unicodedata.normalize("NFC", last_name.strip())

        if not is_valid_name(first) or not is_valid_name(last):
            raise InvalidNameFormat(
                "I campi 'Nome' e 'Cognome' possono contenere solo lettere, spazi e apostrofi."
            )

        require_non_empty(email, "Il campo 'Indirizzo Email' è obbligatorio.")
        normalized = normalize_email(email)
        if not normalized.endswith(self._email_domain):
            raise InvalidEmailDomain(
                f"L'indirizzo email non è valido. Deve terminare con {self._email_domain}"
            )

        if self._roster is not None and not self._roster.contains(normalized):
            raise NotInRoster(
                "Questo indirizzo email non risulta nell'elenco dei docenti autorizzati a firmare."
            )

        return ValidatedSignature(first_name=first, last_name=last, email=normalized)
