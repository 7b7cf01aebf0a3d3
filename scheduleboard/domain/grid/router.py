"""Grid router - The schedule board for one weekday"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...storage import SqlAlchemyStorage
from .schemas import ScheduleGrid
from .service import GridService

router = APIRouter(prefix="/schedules", tags=["Schedules"])


def get_grid_service(db: Session = Depends(get_db)) -> GridService:
    """Dependency injection for GridService"""
    return GridService(SqlAlchemyStorage(db))


@router.get("/{weekday}", response_model=ScheduleGrid)
async def get_schedule_grid(
    weekday: str,
    base_only: bool = Query(False, alias="baseOnly"),
    include_inactive: bool = Query(False, alias="includeInactive"),
    service: GridService = Depends(get_grid_service),
):
    """Full slot x professional table for a weekday, empty cells included"""
    return service.get_grid(weekday, base_only, include_inactive)
