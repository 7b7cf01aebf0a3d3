"""Time slot repository - Database operations for the time grid"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import TimeSlot


class TimeSlotRepository:
    """Repository for time slot database operations"""

    @staticmethod
    def get_slots(db: Session, base_only: bool = False) -> list[TimeSlot]:
        """Get slots ascending by start time, shorter ranges first on ties"""
        query = db.query(TimeSlot)
        if base_only:
            query = query.filter(TimeSlot.is_base_slot.is_(True))
        return query.order_by(TimeSlot.start_time, TimeSlot.end_time, TimeSlot.id).all()

    @staticmethod
    def get_slot_by_id(db: Session, slot_id: int) -> Optional[TimeSlot]:
        return db.query(TimeSlot).filter(TimeSlot.id == slot_id).first()

    @staticmethod
    def get_slot_by_range(db: Session, start_time: str, end_time: str) -> Optional[TimeSlot]:
        return (
            db.query(TimeSlot)
            .filter(TimeSlot.start_time == start_time, TimeSlot.end_time == end_time)
            .first()
        )

    @staticmethod
    def create_slot(db: Session, **slot_data) -> TimeSlot:
        slot = TimeSlot(**slot_data)
        db.add(slot)
        db.commit()
        db.refresh(slot)
        return slot

    @staticmethod
    def delete_slot(db: Session, slot: TimeSlot) -> None:
        db.delete(slot)
        db.commit()
