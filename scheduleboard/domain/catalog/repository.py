"""Activity kind repository - Database operations for the activity catalog"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...errors import DuplicateActivityCodeError
from ...models import ActivityKind

logger = logging.getLogger(__name__)


class ActivityKindRepository:
    """Repository for activity kind database operations"""

    @staticmethod
    def get_kinds(db: Session) -> list[ActivityKind]:
        return db.query(ActivityKind).order_by(ActivityKind.id).all()

    @staticmethod
    def get_kind_by_id(db: Session, kind_id: int) -> Optional[ActivityKind]:
        return db.query(ActivityKind).filter(ActivityKind.id == kind_id).first()

    @staticmethod
    def get_kind_by_code(db: Session, code: str) -> Optional[ActivityKind]:
        return db.query(ActivityKind).filter(ActivityKind.code == code).first()

    @staticmethod
    def create_kind(db: Session, **kind_data) -> ActivityKind:
        """
        Raises:
            DuplicateActivityCodeError: If another writer inserted the same code first
        """
        kind = ActivityKind(**kind_data)
        db.add(kind)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(f"⚠️ Activity code '{kind_data.get('code')}' was inserted concurrently")
            raise DuplicateActivityCodeError(kind_data.get("code"))
        db.refresh(kind)
        return kind

    @staticmethod
    def update_kind(db: Session, kind: ActivityKind, **updates) -> ActivityKind:
        """Update a kind with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(kind, key):
                setattr(kind, key, value)

        db.commit()
        db.refresh(kind)
        return kind

    @staticmethod
    def delete_kind(db: Session, kind: ActivityKind) -> None:
        db.delete(kind)
        db.commit()
