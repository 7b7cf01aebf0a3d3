"""Assignment repository - Database operations for the assignment store"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...errors import DuplicateAssignmentError
from ...models import Assignment, utcnow

logger = logging.getLogger(__name__)


class AssignmentRepository:
    """Repository for assignment database operations"""

    @staticmethod
    def get_assignments(
        db: Session,
        weekday: Optional[str] = None,
        professional_id: Optional[int] = None,
    ) -> list[Assignment]:
        """Get assignments, optionally filtered by weekday and/or professional"""
        query = db.query(Assignment)
        if weekday is not None:
            query = query.filter(Assignment.weekday == weekday)
        if professional_id is not None:
            query = query.filter(Assignment.professional_id == professional_id)
        return query.order_by(Assignment.weekday, Assignment.start_time, Assignment.id).all()

    @staticmethod
    def get_assignment_by_id(db: Session, assignment_id: int) -> Optional[Assignment]:
        return db.query(Assignment).filter(Assignment.id == assignment_id).first()

    @staticmethod
    def create_assignment(db: Session, **assignment_data) -> Assignment:
        """
        Insert a new assignment.

        Raises:
            DuplicateAssignmentError: If the (professional, weekday, start, end)
                unique constraint rejects the row
        """
        assignment = Assignment(updated_at=utcnow(), **assignment_data)
        db.add(assignment)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(
                f"⚠️ Unique key collision inserting assignment for professional "
                f"{assignment_data.get('professional_id')} on {assignment_data.get('weekday')} "
                f"{assignment_data.get('start_time')}-{assignment_data.get('end_time')}"
            )
            raise DuplicateAssignmentError(
                assignment_data.get("professional_id"),
                assignment_data.get("weekday"),
                assignment_data.get("start_time"),
                assignment_data.get("end_time"),
            )
        db.refresh(assignment)
        return assignment

    @staticmethod
    def update_assignment(db: Session, assignment: Assignment, **updates) -> Assignment:
        """Apply updates (None clears optional fields) and refresh the timestamp"""
        for key, value in updates.items():
            if hasattr(assignment, key):
                setattr(assignment, key, value)
        assignment.updated_at = utcnow()
        key = (assignment.professional_id, assignment.weekday, assignment.start_time, assignment.end_time)

        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise DuplicateAssignmentError(*key)
        db.refresh(assignment)
        return assignment

    @staticmethod
    def delete_assignment(db: Session, assignment: Assignment) -> None:
        db.delete(assignment)
        db.commit()
