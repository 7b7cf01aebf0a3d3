"""
Grid resolution: turns sparse assignment records into a full table of cells.

Rows are time slots (ascending start time), columns are professionals (roster
order). An assignment is anchored to every slot sharing its start time; its
end time only affects the rendered height of the cell, never the table shape.

Everything here is pure: inputs are plain records (ORM instances or anything
with the same attributes) and nothing raises for missing catalog entries.
"""

from collections.abc import Iterable, Mapping
from typing import Optional

from ...config import MIN_CELL_HEIGHT
from ...shared.validators import duration_minutes
from ...shared.weekdays import WEEKDAY_NAMES
from .schemas import (
    ActivityKindView,
    GridAssignment,
    GridCell,
    GridProfessional,
    GridRow,
    GridSlot,
    ScheduleGrid,
)

# Neutral kind: "no assignment recorded"
FALLBACK_ACTIVITY_CODE = "disponivel"
FALLBACK_ACTIVITY_KIND = ActivityKindView(code=FALLBACK_ACTIVITY_CODE, name="Disponível", color="#6b7280")


def index_activity_kinds(kinds: Iterable) -> dict[str, ActivityKindView]:
    """Build the code -> kind lookup table used by resolve_activity_kind"""
    return {k.code: ActivityKindView(code=k.code, name=k.name, color=k.color) for k in kinds}


def neutral_kind(kinds_by_code: Mapping[str, ActivityKindView]) -> ActivityKindView:
    """The catalog's own neutral entry when it has one, else the built-in fallback"""
    return kinds_by_code.get(FALLBACK_ACTIVITY_CODE, FALLBACK_ACTIVITY_KIND)


def resolve_activity_kind(
    code: Optional[str], kinds_by_code: Mapping[str, ActivityKindView]
) -> ActivityKindView:
    """Look up an activity code, falling back to the neutral kind when it is unknown"""
    if code and code in kinds_by_code:
        return kinds_by_code[code]
    return neutral_kind(kinds_by_code)


def compute_span(
    assignment_start: str,
    assignment_end: str,
    slot_start: str,
    slot_end: str,
    min_cell_height: float = MIN_CELL_HEIGHT,
) -> tuple[float, float]:
    """
    Display span of an assignment anchored to a slot.

    Returns:
        (span_ratio, height): ratio of activity duration to slot duration and
        the rendered height, never below min_cell_height. An assignment ending
        with its slot has ratio 1.0.
    """
    if assignment_end == slot_end:
        return 1.0, float(min_cell_height)

    slot_minutes = duration_minutes(slot_start, slot_end)
    activity_minutes = duration_minutes(assignment_start, assignment_end)
    ratio = activity_minutes / slot_minutes
    return ratio, max(float(min_cell_height), min_cell_height * ratio)


def find_anchored_assignment(assignments: Iterable, slot) -> Optional[object]:
    """
    Pick the assignment anchored to a slot: same start time, preferring the
    one that also ends with the slot, then the lowest id.
    """
    candidates = [a for a in assignments if a.start_time == slot.start_time]
    if not candidates:
        return None
    candidates.sort(key=lambda a: (a.end_time != slot.end_time, a.id))
    return candidates[0]


def _slot_view(slot) -> GridSlot:
    return GridSlot(
        id=getattr(slot, "id", None),
        startTime=slot.start_time,
        endTime=slot.end_time,
        durationMinutes=duration_minutes(slot.start_time, slot.end_time),
        isBaseSlot=bool(getattr(slot, "is_base_slot", True)),
    )


def _assignment_view(assignment, kinds_by_code: Mapping[str, ActivityKindView]) -> GridAssignment:
    return GridAssignment(
        id=assignment.id,
        startTime=assignment.start_time,
        endTime=assignment.end_time,
        activityCode=assignment.activity_code,
        activity=resolve_activity_kind(assignment.activity_code, kinds_by_code),
        unknownActivity=assignment.activity_code not in kinds_by_code,
        location=assignment.location,
        notes=assignment.notes,
        updatedAt=assignment.updated_at,
    )


def build_cell(
    professional_id: int,
    slot,
    assignment,
    kinds_by_code: Mapping[str, ActivityKindView],
    min_cell_height: float = MIN_CELL_HEIGHT,
) -> GridCell:
    if assignment is None:
        kind = neutral_kind(kinds_by_code)
        return GridCell(
            professionalId=professional_id,
            startTime=slot.start_time,
            endTime=slot.end_time,
            empty=True,
            activityCode=kind.code,
            activity=kind,
            height=float(min_cell_height),
        )

    ratio, height = compute_span(
        assignment.start_time, assignment.end_time, slot.start_time, slot.end_time, min_cell_height
    )
    return GridCell(
        professionalId=professional_id,
        startTime=slot.start_time,
        endTime=slot.end_time,
        empty=False,
        assignmentId=assignment.id,
        activityCode=assignment.activity_code,
        activity=resolve_activity_kind(assignment.activity_code, kinds_by_code),
        unknownActivity=assignment.activity_code not in kinds_by_code,
        assignmentStartTime=assignment.start_time,
        assignmentEndTime=assignment.end_time,
        location=assignment.location,
        notes=assignment.notes,
        spanRatio=ratio,
        height=height,
    )


def build_grid(
    weekday: str,
    slots: Iterable,
    professionals: Iterable,
    assignments: Iterable,
    kinds: Iterable,
    min_cell_height: int = MIN_CELL_HEIGHT,
) -> ScheduleGrid:
    """Resolve one weekday into exactly len(slots) x len(professionals) cells"""
    slots = sorted(slots, key=lambda s: (s.start_time, s.end_time))
    professionals = list(professionals)
    kinds_by_code = index_activity_kinds(kinds)

    by_professional: dict[int, list] = {p.id: [] for p in professionals}
    for assignment in assignments:
        if assignment.weekday == weekday and assignment.professional_id in by_professional:
            by_professional[assignment.professional_id].append(assignment)
    for own in by_professional.values():
        own.sort(key=lambda a: (a.start_time, a.end_time, a.id))

    rows = []
    for slot in slots:
        cells = [
            build_cell(
                p.id,
                slot,
                find_anchored_assignment(by_professional[p.id], slot),
                kinds_by_code,
                min_cell_height,
            )
            for p in professionals
        ]
        rows.append(GridRow(slot=_slot_view(slot), cells=cells))

    return ScheduleGrid(
        weekday=weekday,
        weekdayName=WEEKDAY_NAMES.get(weekday, weekday),
        minCellHeight=min_cell_height,
        slots=[_slot_view(s) for s in slots],
        professionals=[
            GridProfessional(
                id=p.id,
                name=p.name,
                initials=p.initials,
                active=bool(p.active),
                assignments=[_assignment_view(a, kinds_by_code) for a in by_professional[p.id]],
            )
            for p in professionals
        ],
        rows=rows,
    )
