from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import month_bounds
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_float
from .model import TimeEntry
from .repository import TimeEntryRepository

_COLUMNS = "entry_id, user_id, work_date, check_in, check_out, working_hours"


def _to_entry(r: Dict[str, Any]) -> TimeEntry:
    return TimeEntry(
        entry_id=int(r["entry_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in=r["check_in"],
        check_out=r.get("check_out"),
        working_hours=to_float(r.get("working_hours")),
    )


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_by_date(self, *, user_id: int, work_date: date) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE user_id=%s AND work_date=%s
                ORDER BY check_in ASC, entry_id ASC
                """,
                (int(user_id), work_date),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def list_by_month(self, *, user_id: int, year: int, month: int) -> Sequence[TimeEntry]:
        start, end = month_bounds(year, month)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE user_id=%s AND work_date >= %s AND work_date < %s
                ORDER BY work_date ASC, check_in ASC
                """,
                (int(user_id), start, end),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def list_all(self, *, user_id: int, limit: int) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE user_id=%s
                ORDER BY work_date DESC, check_in DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def get_by_id(self, *, user_id: int, entry_id: int) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM time_entries WHERE entry_id=%s AND user_id=%s",
                (int(entry_id), int(user_id)),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def create_checkin(self, *, user_id: int, work_date: date, check_in: datetime) -> TimeEntry:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_entries(user_id, work_date, check_in, check_out, working_hours)
                VALUES(%s,%s,%s,NULL,NULL)
                """,
                (int(user_id), work_date, check_in),
            )
            return TimeEntry(
                entry_id=int(cur.lastrowid),
                user_id=int(user_id),
                work_date=work_date,
                check_in=check_in,
            )

    def update_checkout(
        self,
        *,
        user_id: int,
        entry_id: int,
        check_out: datetime,
        working_hours: float,
    ) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_entries
                SET check_out=%s, working_hours=%s
                WHERE entry_id=%s AND user_id=%s
                """,
                (check_out, working_hours, int(entry_id), int(user_id)),
            )
            if cur.rowcount <= 0:
                return None
        return self.get_by_id(user_id=user_id, entry_id=entry_id)

    def update(self, *, entry: TimeEntry) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_entries
                SET work_date=%s, check_in=%s, check_out=%s, working_hours=%s
                WHERE entry_id=%s AND user_id=%s
                """,
                (
                    entry.work_date,
                    entry.check_in,
                    entry.check_out,
                    entry.working_hours,
                    int(entry.entry_id),
                    int(entry.user_id),
                ),
            )
            # MySQL reports 0 affected rows when nothing changed; check existence instead.
        return self.get_by_id(user_id=entry.user_id, entry_id=entry.entry_id)

    def delete(self, *, user_id: int, entry_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM time_entries WHERE entry_id=%s AND user_id=%s", (int(entry_id), int(user_id)))
            return cur.rowcount > 0
