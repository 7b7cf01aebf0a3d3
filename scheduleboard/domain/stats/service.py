"""Statistics - counts of assignments by activity, a plain reduction over the store"""

from collections import Counter, defaultdict
from collections.abc import Iterable
from typing import Optional

from ...shared.validators import duration_minutes
from ...shared.weekdays import WEEKDAYS
from ...storage import ScheduleStorage
from ..grid.resolver import index_activity_kinds
from .schemas import ActivityCount, ScheduleStats


def summarize_assignments(
    assignments: Iterable,
    kinds: Iterable,
    weekday: Optional[str] = None,
    top: Optional[int] = None,
) -> ScheduleStats:
    """
    Group assignments by activity code, most frequent first (ties by code).
    Unknown codes are reported under their own code with the raw code as name.
    """
    assignments = [a for a in assignments if weekday is None or a.weekday == weekday]
    kinds_by_code = index_activity_kinds(kinds)

    counts: Counter = Counter()
    minutes: dict[str, int] = defaultdict(int)
    by_weekday = {day: 0 for day in WEEKDAYS}
    for a in assignments:
        counts[a.activity_code] += 1
        minutes[a.activity_code] += duration_minutes(a.start_time, a.end_time)
        by_weekday[a.weekday] = by_weekday.get(a.weekday, 0) + 1

    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    if top is not None:
        ranked = ranked[:top]

    by_activity = []
    for code, n in ranked:
        kind = kinds_by_code.get(code)
        by_activity.append(
            ActivityCount(
                code=code,
                name=kind.name if kind else code,
                color=kind.color if kind else "#6b7280",
                count=n,
                minutes=minutes[code],
                known=kind is not None,
            )
        )

    return ScheduleStats(
        weekday=weekday,
        totalAssignments=len(assignments),
        totalMinutes=sum(minutes.values()),
        byActivity=by_activity,
        byWeekday=by_weekday,
    )


class StatsService:
    def __init__(self, storage: ScheduleStorage):
        self.storage = storage

    def summarize(self, weekday: Optional[str] = None, top: Optional[int] = None) -> ScheduleStats:
        return summarize_assignments(
            self.storage.list_assignments(weekday=weekday),
            self.storage.list_activity_kinds(),
            weekday=weekday,
            top=top,
        )
