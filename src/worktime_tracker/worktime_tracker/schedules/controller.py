from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_user_id, handle_domain_errors, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from ..timekeeping.duration import format_duration
from .model import WorkSchedule
from .service import KEEP, ScheduleService


def schedule_to_dict(s: WorkSchedule) -> dict:
    return {
        "id": s.schedule_id,
        "date": s.work_date.strftime("%Y-%m-%d"),
        "start_time": s.start_time,
        "end_time": s.end_time,
        "planned_hours": s.planned_hours,
        "description": s.description,
    }


def _required(payload: dict, *keys: str) -> None:
    missing = [k for k in keys if not payload.get(k)]
    if missing:
        raise ValidationError(f"Missing fields: {', '.join(missing)}")


def register(app: Flask, container: Container) -> None:
    service = container.schedule_service

    @app.route("/api/schedules", methods=["GET"], endpoint="schedules_month")
    @login_required
    @handle_domain_errors("load work schedules")
    def month():
        today = container.clock.now().date()
        year = request.args.get("year", default=today.year, type=int)
        month_ = request.args.get("month", default=today.month, type=int)

        result = service.monthly(current_user_id(), year, month_)
        per_day = ScheduleService.planned_hours_by_date(result.schedules)
        return jsonify(
            {
                "year": result.year,
                "month": result.month,
                "schedules": [schedule_to_dict(s) for s in result.schedules],
                "days": {
                    d.strftime("%Y-%m-%d"): {"planned_hours": h, "display": format_duration(h, compact=True)}
                    for d, h in sorted(per_day.items())
                },
                "summary": {
                    "total_hours": result.summary.total_hours,
                    "day_count": result.summary.day_count,
                    "avg_hours_per_day": result.summary.avg_hours_per_day,
                },
            }
        )

    @app.route("/api/schedules/day", methods=["GET"], endpoint="schedules_day")
    @login_required
    @handle_domain_errors("load work schedules")
    def day():
        work_date = request.args.get("date") or container.clock.now().date().strftime("%Y-%m-%d")
        schedules = service.for_date(current_user_id(), parse_iso_date(work_date))
        return jsonify([schedule_to_dict(s) for s in schedules])

    @app.route("/api/schedules", methods=["POST"], endpoint="schedules_create")
    @login_required
    @handle_domain_errors("save work schedule")
    def create():
        payload = request.get_json(silent=True) or {}
        _required(payload, "date", "start_time", "end_time")

        created = service.create(
            current_user_id(),
            work_date=parse_iso_date(payload["date"]),
            start_time=payload["start_time"],
            end_time=payload["end_time"],
            description=payload.get("description"),
        )
        return jsonify(schedule_to_dict(created)), 201

    @app.route("/api/schedules/<int:schedule_id>", methods=["PUT"], endpoint="schedules_update")
    @login_required
    @handle_domain_errors("save work schedule")
    def update(schedule_id: int):
        payload = request.get_json(silent=True) or {}
        _required(payload, "start_time", "end_time")

        updated = service.update(
            current_user_id(),
            schedule_id,
            start_time=payload["start_time"],
            end_time=payload["end_time"],
            description=payload["description"] if "description" in payload else KEEP,
            work_date=parse_iso_date(payload["date"]) if payload.get("date") else None,
        )
        return jsonify(schedule_to_dict(updated))

    @app.route("/api/schedules/<int:schedule_id>", methods=["DELETE"], endpoint="schedules_delete")
    @login_required
    @handle_domain_errors("delete work schedule")
    def delete(schedule_id: int):
        service.delete(current_user_id(), schedule_id)
        return "", 204
