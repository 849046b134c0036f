from datetime import datetime, timedelta

from src.signature_register.signature_register.core.enums import NoticeLevel
from src.signature_register.signature_register.signatures import notice as notice_module
from src.signature_register.signature_register.signatures.notice import build_notice, success_notice


def test_success_notice_lasts_five_seconds(fixed_now):
    notice = success_notice("Mario", "Rossi", now=fixed_now)

    assert notice.level is NoticeLevel.SUCCESS
    assert notice.expires_at == fixed_now + timedelta(seconds=5)
    assert not notice.is_expired(fixed_now + timedelta(seconds=4))
    assert notice.is_expired(fixed_now + timedelta(seconds=5))


def test_is_expired_defaults_to_local_clock(fixed_now, monkeypatch):
    notice = build_notice("Attenzione", now=fixed_now)

    monkeypatch.setattr(notice_module, "now_local", lambda: fixed_now + timedelta(seconds=1))
    assert not notice.is_expired()

    monkeypatch.setattr(notice_module, "now_local", lambda: datetime(2026, 10, 19, 9, 0, 0))
    assert notice.is_expired()
