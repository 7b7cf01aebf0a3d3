"""Grid service - Cached read path for the weekly schedule board"""

import logging

from ...cache import get_grid_cached, get_grid_version, set_grid_cached
from ...config import MIN_CELL_HEIGHT
from ...errors import ValidationError
from ...shared.weekdays import WEEKDAYS, is_weekday
from ...storage import ScheduleStorage
from .resolver import build_grid
from .schemas import ScheduleGrid

logger = logging.getLogger(__name__)


class GridService:
    """Loads roster, slots, catalog and assignments and resolves them into a grid"""

    def __init__(self, storage: ScheduleStorage, min_cell_height: int = MIN_CELL_HEIGHT):
        self.storage = storage
        self.min_cell_height = min_cell_height

    def get_grid(self, weekday: str, base_only: bool = False, include_inactive: bool = False) -> ScheduleGrid:
        """
        Resolve one weekday. Served from the Redis cache when present; every
        write to the weekday invalidates it.

        Raises:
            ValidationError: If weekday is not one of the seven enumerators
        """
        if not is_weekday(weekday):
            raise ValidationError.single("weekday", f"weekday must be one of: {', '.join(WEEKDAYS)}")

        cached = get_grid_cached(weekday, base_only, include_inactive)
        if cached is not None:
            return ScheduleGrid.model_validate(cached)

        # Noted before loading storage so a concurrent write is detected on store
        version = get_grid_version(weekday)
        grid = build_grid(
            weekday,
            slots=self.storage.list_time_slots(base_only),
            professionals=self.storage.list_professionals(include_inactive),
            assignments=self.storage.list_assignments(weekday=weekday),
            kinds=self.storage.list_activity_kinds(),
            min_cell_height=self.min_cell_height,
        )
        logger.debug(
            f"📅 Resolved grid for {weekday}: {len(grid.slots)} slots x {len(grid.professionals)} professionals"
        )
        set_grid_cached(weekday, grid.model_dump(mode="json"), base_only, include_inactive, version)
        return grid
