"""Time grid schemas - Pydantic models for time slots"""

from typing import Optional

from pydantic import BaseModel, Field


class TimeSlotCreate(BaseModel):
    startTime: str
    endTime: str
    interval: Optional[int] = Field(default=None, gt=0)  # minutes; defaults to the slot duration
    isBaseSlot: bool = True


class TimeSlotResponse(BaseModel):
    id: int
    startTime: str
    endTime: str
    interval: Optional[int] = None
    isBaseSlot: bool


def slot_to_response(slot) -> TimeSlotResponse:
    return TimeSlotResponse(
        id=slot.id,
        startTime=slot.start_time,
        endTime=slot.end_time,
        interval=slot.interval,
        isBaseSlot=slot.is_base_slot,
    )
