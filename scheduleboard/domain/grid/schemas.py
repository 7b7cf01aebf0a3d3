"""Grid domain schemas - Read-only projection of one weekday"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ActivityKindView(BaseModel):
    code: str
    name: str
    color: str


class GridSlot(BaseModel):
    id: Optional[int] = None
    startTime: str
    endTime: str
    durationMinutes: int
    isBaseSlot: bool = True


class GridAssignment(BaseModel):
    id: int
    startTime: str
    endTime: str
    activityCode: str
    activity: ActivityKindView
    unknownActivity: bool = False
    location: Optional[str] = None
    notes: Optional[str] = None
    updatedAt: Optional[datetime] = None


class GridProfessional(BaseModel):
    id: int
    name: str
    initials: str
    active: bool = True
    assignments: list[GridAssignment] = []


class GridCell(BaseModel):
    """One (slot, professional) cell. Empty cells carry the neutral kind, never null."""

    professionalId: int
    startTime: str
    endTime: str
    empty: bool
    assignmentId: Optional[int] = None
    activityCode: str
    activity: ActivityKindView
    unknownActivity: bool = False
    assignmentStartTime: Optional[str] = None
    assignmentEndTime: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    spanRatio: float = 1.0
    height: float


class GridRow(BaseModel):
    slot: GridSlot
    cells: list[GridCell]


class ScheduleGrid(BaseModel):
    weekday: str
    weekdayName: str
    minCellHeight: int
    slots: list[GridSlot]
    professionals: list[GridProfessional]
    rows: list[GridRow]
