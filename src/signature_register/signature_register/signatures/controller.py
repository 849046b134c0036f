from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..core.enums import NoticeLevel, SortDirection, SortKey
from ..core.exceptions import AuthorizationError, DuplicateEmail, EmptyExport, StorageError, ValidationError
from ..container import Container
from .exporter import export_filename, header_only
from .notice import build_notice, success_notice
from .sorter import SortConfig, next_sort

logger = logging.getLogger(__name__)


def _truthy(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}


def register(app: Flask, container: Container) -> None:
    ledger = container.ledger

    def is_admin() -> bool:
        # Out-of-band signal: the page is opened with ?admin=true, then kept in the session.
        flag = request.args.get("admin")
        if flag == "true":
            session["is_admin"] = True
        elif flag == "false":
            session.pop("is_admin", None)
        return bool(session.get("is_admin"))

    def notice_response(message: str, status: int, *, level: NoticeLevel = NoticeLevel.WARNING, **extra):
        body = {"success": False, "notice": build_notice(message, now=now_local(), level=level).to_dict()}
        body.update(extra)
        return jsonify(body), status

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not is_admin():
                return notice_response("Operazione riservata all'amministratore.", 403, level=NoticeLevel.DANGER)
            return view(*args, **kwargs)

        return wrapper

    def request_payload():
        payload = request.get_json(silent=True)
        return payload if isinstance(payload, dict) else request.form

    def sort_args() -> tuple[SortKey, SortDirection]:
        return (
            SortKey(request.args.get("sort", SortKey.LAST_NAME.value)),
            SortDirection(request.args.get("direction", SortDirection.ASCENDING.value)),
        )

    @app.route("/", methods=["GET"], endpoint="index")
    @app.route("/signatures", methods=["GET"], endpoint="list_signatures")
    def list_signatures():
        try:
            key, direction = sort_args()
        except ValueError:
            return notice_response("Criterio di ordinamento non valido.", 400)

        records = ledger.ordered(key, direction)
        current = SortConfig(key=key, direction=direction)
        header_links = {k.value: next_sort(current, k).direction.value for k in SortKey}
        return jsonify(
            {
                "count": len(records),
                "is_admin": is_admin(),
                "sort": {"key": key.value, "direction": direction.value},
                "next_sort": header_links,
                "signatures": [r.to_dict() for r in records],
            }
        )

    @app.route("/signatures", methods=["POST"], endpoint="sign")
    def sign():
        payload = request_payload()
        first_name = str(payload.get("first_name", "") or "")
        last_name = str(payload.get("last_name", "") or "")
        email = str(payload.get("email", "") or "")
        submitted = {"first_name": first_name, "last_name": last_name, "email": email}

        try:
            record = ledger.insert(first_name, last_name, email)
        except ValidationError as e:
            return notice_response(str(e), 400, error=type(e).__name__, input=submitted)
        except DuplicateEmail as e:
            return notice_response(
                str(e), 409, error="DuplicateEmail", existing=e.existing.to_dict(), input=submitted
            )
        except StorageError as e:
            logger.error("Signing failed for %s: %s", email, e)
            return notice_response(str(e), 503, level=NoticeLevel.DANGER, error=type(e).__name__, input=submitted)

        notice = success_notice(record.first_name, record.last_name, now=now_local())
        return jsonify({"success": True, "signature": record.to_dict(), "notice": notice.to_dict()}), 201

    @app.route("/signatures/export.csv", methods=["GET"], endpoint="export_signatures")
    @admin_required
    def export_signatures():
        try:
            key, direction = sort_args()
        except ValueError:
            return notice_response("Criterio di ordinamento non valido.", 400)

        try:
            text = ledger.export(key, direction)
        except EmptyExport as e:
            if not _truthy(request.args.get("allow_empty")):
                return notice_response(str(e), 404)
            text = header_only()

        return app.response_class(
            text.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={export_filename(now_local().date())}"},
        )

    @app.route("/signatures/reset", methods=["POST"], endpoint="reset_signatures")
    @admin_required
    def reset_signatures():
        payload = request_payload()
        if not _truthy(payload.get("confirm")):
            return notice_response("Conferma richiesta per eliminare tutte le firme.", 400)

        try:
            ledger.reset(privileged=is_admin())
        except AuthorizationError as e:
            return notice_response(str(e), 403, level=NoticeLevel.DANGER)
        except StorageError as e:
            return notice_response(str(e), 503, level=NoticeLevel.DANGER)

        notice = build_notice("Tutte le firme sono state eliminate.", now=now_local(), level=NoticeLevel.SUCCESS)
        return jsonify({"success": True, "count": 0, "notice": notice.to_dict()})
