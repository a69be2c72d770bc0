from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_user_id, handle_domain_errors, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from ..timekeeping.duration import format_duration
from .model import TimeEntry
from .service import TodayStatus


def entry_to_dict(e: TimeEntry) -> dict:
    return {
        "id": e.entry_id,
        "date": e.work_date.strftime("%Y-%m-%d"),
        "check_in": e.check_in.isoformat() if e.check_in else None,
        "check_out": e.check_out.isoformat() if e.check_out else None,
        "working_hours": e.working_hours,
        "working_hours_display": format_duration(e.working_hours),
    }


def today_to_dict(status: TodayStatus) -> dict:
    state = status.state
    return {
        "date": status.work_date.strftime("%Y-%m-%d"),
        "checked_in": state.checked_in,
        "open_entry": entry_to_dict(state.open_entry) if state.open_entry else None,
        "inconsistent": state.is_inconsistent,
        "total_hours": status.total_hours,
        "total_display": status.total_display,
        "entries": [entry_to_dict(e) for e in status.entries],
    }


def register(app: Flask, container: Container) -> None:
    service = container.time_entry_service

    @app.route("/api/time-entries/today", methods=["GET"], endpoint="time_entries_today")
    @login_required
    @handle_domain_errors("load records")
    def today():
        return jsonify(today_to_dict(service.today(current_user_id())))

    @app.route("/api/time-entries", methods=["GET"], endpoint="time_entries_history")
    @login_required
    @handle_domain_errors("load records")
    def history():
        return jsonify([entry_to_dict(e) for e in service.history(current_user_id())])

    @app.route("/api/time-entries/month", methods=["GET"], endpoint="time_entries_month")
    @login_required
    @handle_domain_errors("load records")
    def month():
        today = container.clock.now().date()
        year = request.args.get("year", default=today.year, type=int)
        month_ = request.args.get("month", default=today.month, type=int)

        total = service.monthly_worked_hours(current_user_id(), year, month_)
        return jsonify({"year": year, "month": month_, "total_hours": total, "total_display": format_duration(total)})

    @app.route("/api/time-entries/check-in", methods=["POST"], endpoint="time_entries_check_in")
    @login_required
    @handle_domain_errors("save check-in")
    def check_in():
        entry = service.check_in(current_user_id())
        return jsonify(entry_to_dict(entry)), 201

    @app.route("/api/time-entries/check-out", methods=["POST"], endpoint="time_entries_check_out")
    @login_required
    @handle_domain_errors("save check-out")
    def check_out():
        return jsonify(entry_to_dict(service.check_out(current_user_id())))

    @app.route("/api/time-entries/<int:entry_id>", methods=["PUT"], endpoint="time_entries_edit")
    @login_required
    @handle_domain_errors("update record")
    def edit(entry_id: int):
        payload = request.get_json(silent=True) or {}
        if not payload.get("date") or not payload.get("check_in"):
            raise ValidationError("date and check_in are required")

        entry = service.edit_entry(
            current_user_id(),
            entry_id,
            work_date=parse_iso_date(payload["date"]),
            check_in=payload["check_in"],
            check_out=payload.get("check_out") or None,
        )
        return jsonify(entry_to_dict(entry))

    @app.route("/api/time-entries/<int:entry_id>", methods=["DELETE"], endpoint="time_entries_delete")
    @login_required
    @handle_domain_errors("delete record")
    def delete(entry_id: int):
        service.delete_entry(current_user_id(), entry_id)
        return "", 204
