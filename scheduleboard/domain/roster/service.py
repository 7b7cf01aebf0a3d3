"""Roster service - Business logic for professionals"""

import logging

from sqlalchemy.orm import Session

from ...cache import invalidate_all_grids
from ...errors import NotFoundError, ValidationError
from ...models import Professional
from ...shared.validators import initials_from_name
from .repository import ProfessionalRepository
from .schemas import ProfessionalCreate, ProfessionalUpdate

logger = logging.getLogger(__name__)


class RosterService:
    """Service layer for the professional roster"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProfessionalRepository()

    def list_professionals(self, include_inactive: bool = True) -> list[Professional]:
        return self.repo.get_professionals(self.db, include_inactive)

    def get_professional(self, professional_id: int) -> Professional:
        professional = self.repo.get_professional_by_id(self.db, professional_id)
        if not professional:
            raise NotFoundError("Professional", professional_id)
        return professional

    def create_professional(self, data: ProfessionalCreate) -> Professional:
        professional = self.repo.create_professional(
            self.db,
            name=data.name,
            initials=data.initials or initials_from_name(data.name),
            active=data.active,
        )
        logger.info(f"✅ Created professional {professional.id} ({professional.initials})")
        invalidate_all_grids()
        return professional

    def update_professional(self, professional_id: int, data: ProfessionalUpdate) -> Professional:
        professional = self.get_professional(professional_id)

        updates = {}
        if data.name is not None:
            name = data.name.strip()
            if not name:
                raise ValidationError.single("name", "name must not be empty")
            updates["name"] = name
        if data.initials is not None:
            updates["initials"] = data.initials
        if data.active is not None:
            updates["active"] = data.active

        professional = self.repo.update_professional(self.db, professional, **updates)
        invalidate_all_grids()
        return professional

    def delete_professional(self, professional_id: int) -> None:
        """Delete a professional. Their assignments stay stored but drop out of the grid."""
        professional = self.get_professional(professional_id)
        self.repo.delete_professional(self.db, professional)
        logger.info(f"🗑️ Deleted professional {professional_id}")
        invalidate_all_grids()
