from typing import Optional

from pydantic import BaseModel


class ActivityCount(BaseModel):
    code: str
    name: str
    color: str
    count: int
    minutes: int
    known: bool = True  # False when the code has no catalog entry


class ScheduleStats(BaseModel):
    weekday: Optional[str] = None
    totalAssignments: int
    totalMinutes: int
    byActivity: list[ActivityCount]
    byWeekday: dict[str, int]
