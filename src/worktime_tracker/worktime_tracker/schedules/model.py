from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class WorkSchedule:
    """Planned work block; ``start_time``/``end_time`` are "HH:MM"."""

    schedule_id: int
    user_id: int
    work_date: date
    start_time: str
    end_time: str
    planned_hours: float
    description: Optional[str] = None
