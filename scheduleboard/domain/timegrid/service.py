"""Time grid service - The canonical set of time slots for a day"""

import logging

from sqlalchemy.orm import Session

from ...cache import invalidate_all_grids
from ...errors import NotFoundError, ValidationError
from ...models import TimeSlot
from ...shared.validators import duration_minutes, validate_time_range
from .repository import TimeSlotRepository
from .schemas import TimeSlotCreate

logger = logging.getLogger(__name__)


class TimeGridService:
    """Service layer for time slots. Slots may differ in duration."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = TimeSlotRepository()

    def list_slots(self, base_only: bool = False) -> list[TimeSlot]:
        """Slots ascending by start time; an empty list is a valid grid"""
        return self.repo.get_slots(self.db, base_only)

    def create_slot(self, data: TimeSlotCreate) -> TimeSlot:
        errors = validate_time_range(data.startTime, data.endTime)
        if errors:
            raise ValidationError(errors)
        if self.repo.get_slot_by_range(self.db, data.startTime, data.endTime):
            raise ValidationError.single("startTime", f"Slot {data.startTime}-{data.endTime} already exists")

        slot = self.repo.create_slot(
            self.db,
            start_time=data.startTime,
            end_time=data.endTime,
            interval=data.interval or duration_minutes(data.startTime, data.endTime),
            is_base_slot=data.isBaseSlot,
        )
        logger.info(f"✅ Created time slot {slot.start_time}-{slot.end_time}")
        invalidate_all_grids()
        return slot

    def delete_slot(self, slot_id: int) -> None:
        slot = self.repo.get_slot_by_id(self.db, slot_id)
        if not slot:
            raise NotFoundError("Time slot", slot_id)
        self.repo.delete_slot(self.db, slot)
        logger.info(f"🗑️ Deleted time slot {slot_id}")
        invalidate_all_grids()
