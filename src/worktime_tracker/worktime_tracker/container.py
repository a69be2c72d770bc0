from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_time_entry_repository import MySQLTimeEntryRepository
from .attendance.repository import TimeEntryRepository
from .attendance.service import TimeEntryService
from .common.datetime_utils import Clock, SystemClock
from .database.connection import DBConfig, DatabaseConnection
from .schedules.mysql_schedule_repository import MySQLWorkScheduleRepository
from .schedules.repository import WorkScheduleRepository
from .schedules.service import ScheduleService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    clock: Clock

    time_entries_repo: TimeEntryRepository
    schedules_repo: WorkScheduleRepository

    time_entry_service: TimeEntryService
    schedule_service: ScheduleService


def build_services(
    *,
    time_entries_repo: TimeEntryRepository,
    schedules_repo: WorkScheduleRepository,
    clock: Optional[Clock] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    clock = clock or SystemClock()
    return Container(
        conn=conn,
        clock=clock,
        time_entries_repo=time_entries_repo,
        schedules_repo=schedules_repo,
        time_entry_service=TimeEntryService(time_entries_repo, clock=clock),
        schedule_service=ScheduleService(schedules_repo),
    )


def build_container(*, db_config: dict, connect_timeout: int = 10) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config), connect_timeout=connect_timeout)
    return build_services(
        time_entries_repo=MySQLTimeEntryRepository(conn),
        schedules_repo=MySQLWorkScheduleRepository(conn),
        conn=conn,
    )
