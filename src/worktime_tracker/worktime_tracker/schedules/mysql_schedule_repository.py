from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import month_bounds
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_float, to_hhmm
from .model import WorkSchedule
from .repository import WorkScheduleRepository

_COLUMNS = "schedule_id, user_id, work_date, start_time, end_time, planned_hours, description"


def _to_schedule(r: Dict[str, Any]) -> WorkSchedule:
    return WorkSchedule(
        schedule_id=int(r["schedule_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        start_time=to_hhmm(r["start_time"]),
        end_time=to_hhmm(r["end_time"]),
        planned_hours=to_float(r["planned_hours"]),
        description=r.get("description"),
    )


class MySQLWorkScheduleRepository(WorkScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_by_month(self, *, user_id: int, year: int, month: int) -> Sequence[WorkSchedule]:
        start, end = month_bounds(year, month)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_schedules
                WHERE user_id=%s AND work_date >= %s AND work_date < %s
                ORDER BY work_date ASC, start_time ASC
                """,
                (int(user_id), start, end),
            )
            return [_to_schedule(r) for r in fetchall(cur)]

    def list_by_date(self, *, user_id: int, work_date: date) -> Sequence[WorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_schedules
                WHERE user_id=%s AND work_date=%s
                ORDER BY start_time ASC
                """,
                (int(user_id), work_date),
            )
            return [_to_schedule(r) for r in fetchall(cur)]

    def get_by_id(self, *, user_id: int, schedule_id: int) -> Optional[WorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM work_schedules WHERE schedule_id=%s AND user_id=%s",
                (int(schedule_id), int(user_id)),
            )
            r = fetchone(cur)
            return _to_schedule(r) if r else None

    def create(
        self,
        *,
        user_id: int,
        work_date: date,
        start_time: str,
        end_time: str,
        planned_hours: float,
        description: Optional[str] = None,
    ) -> WorkSchedule:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_schedules(user_id, work_date, start_time, end_time, planned_hours, description)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), work_date, start_time, end_time, planned_hours, description),
            )
            return WorkSchedule(
                schedule_id=int(cur.lastrowid),
                user_id=int(user_id),
                work_date=work_date,
                start_time=start_time,
                end_time=end_time,
                planned_hours=planned_hours,
                description=description,
            )

    def update(self, *, schedule: WorkSchedule) -> Optional[WorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_schedules
                SET work_date=%s, start_time=%s, end_time=%s, planned_hours=%s, description=%s
                WHERE schedule_id=%s AND user_id=%s
                """,
                (
                    schedule.work_date,
                    schedule.start_time,
                    schedule.end_time,
                    schedule.planned_hours,
                    schedule.description,
                    int(schedule.schedule_id),
                    int(schedule.user_id),
                ),
            )
        return self.get_by_id(user_id=schedule.user_id, schedule_id=schedule.schedule_id)

    def delete(self, *, user_id: int, schedule_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_schedules WHERE schedule_id=%s AND user_id=%s", (int(schedule_id), int(user_id)))
            return cur.rowcount > 0
