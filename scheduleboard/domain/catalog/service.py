"""Activity catalog service - Business logic for activity kinds"""

import logging

from sqlalchemy.orm import Session

from ...cache import invalidate_all_grids
from ...errors import DuplicateActivityCodeError, NotFoundError, ValidationError
from ...models import ActivityKind
from .repository import ActivityKindRepository
from .schemas import ActivityKindCreate, ActivityKindUpdate

logger = logging.getLogger(__name__)


class ActivityCatalogService:
    """
    Service layer for the activity catalog. Removing a kind that assignments
    still reference is allowed; the grid falls back to the neutral kind.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = ActivityKindRepository()

    def list_kinds(self) -> list[ActivityKind]:
        return self.repo.get_kinds(self.db)

    def get_kind(self, kind_id: int) -> ActivityKind:
        kind = self.repo.get_kind_by_id(self.db, kind_id)
        if not kind:
            raise NotFoundError("Activity kind", kind_id)
        return kind

    def upsert_kind(self, data: ActivityKindCreate) -> tuple[ActivityKind, bool]:
        """Create a kind, or update the one with the same code. Returns (kind, created)."""
        existing = self.repo.get_kind_by_code(self.db, data.code)
        if not existing:
            try:
                kind = self.repo.create_kind(self.db, code=data.code, name=data.name, color=data.color)
                created = True
                logger.info(f"✅ Created activity kind '{kind.code}'")
            except DuplicateActivityCodeError:
                existing = self.repo.get_kind_by_code(self.db, data.code)
                if not existing:
                    raise

        if existing:
            kind = self.repo.update_kind(self.db, existing, name=data.name, color=data.color)
            created = False
            logger.info(f"✏️ Updated activity kind '{kind.code}'")

        invalidate_all_grids()
        return kind, created

    def update_kind(self, kind_id: int, data: ActivityKindUpdate) -> ActivityKind:
        kind = self.get_kind(kind_id)

        updates = {}
        if data.code is not None:
            code = data.code.strip()
            if not code:
                raise ValidationError.single("code", "code must not be empty")
            other = self.repo.get_kind_by_code(self.db, code)
            if other and other.id != kind.id:
                raise ValidationError.single("code", f"Activity code '{code}' is already in use")
            updates["code"] = code
        if data.name is not None:
            name = data.name.strip()
            if not name:
                raise ValidationError.single("name", "name must not be empty")
            updates["name"] = name
        if data.color is not None:
            updates["color"] = data.color

        kind = self.repo.update_kind(self.db, kind, **updates)
        invalidate_all_grids()
        return kind

    def remove_kind(self, kind_id: int) -> None:
        kind = self.get_kind(kind_id)
        code = kind.code
        self.repo.delete_kind(self.db, kind)
        logger.info(f"🗑️ Removed activity kind '{code}'")
        invalidate_all_grids()
