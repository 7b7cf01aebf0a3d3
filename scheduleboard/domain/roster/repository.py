"""Professional repository - Database operations for the roster"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Professional


class ProfessionalRepository:
    """Repository for professional database operations"""

    @staticmethod
    def get_professionals(db: Session, include_inactive: bool = True) -> list[Professional]:
        """Get professionals in roster order"""
        query = db.query(Professional)
        if not include_inactive:
            query = query.filter(Professional.active.is_(True))
        return query.order_by(Professional.id).all()

    @staticmethod
    def get_professional_by_id(db: Session, professional_id: int) -> Optional[Professional]:
        return db.query(Professional).filter(Professional.id == professional_id).first()

    @staticmethod
    def create_professional(db: Session, **professional_data) -> Professional:
        professional = Professional(**professional_data)
        db.add(professional)
        db.commit()
        db.refresh(professional)
        return professional

    @staticmethod
    def update_professional(db: Session, professional: Professional, **updates) -> Professional:
        """Update a professional with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(professional, key):
                setattr(professional, key, value)

        db.commit()
        db.refresh(professional)
        return professional

    @staticmethod
    def delete_professional(db: Session, professional: Professional) -> None:
        db.delete(professional)
        db.commit()
