"""Stats router - Activity distribution across the week"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...errors import ValidationError
from ...shared.weekdays import is_weekday
from ...storage import SqlAlchemyStorage
from .schemas import ScheduleStats
from .service import StatsService

router = APIRouter(prefix="/stats", tags=["Statistics"])


def get_stats_service(db: Session = Depends(get_db)) -> StatsService:
    return StatsService(SqlAlchemyStorage(db))


@router.get("", response_model=ScheduleStats)
async def get_stats(
    weekday: Optional[str] = Query(None),
    top: Optional[int] = Query(None, ge=1),
    service: StatsService = Depends(get_stats_service),
):
    """Assignment counts and minutes per activity, optionally for one weekday or the top N"""
    if weekday is not None and not is_weekday(weekday):
        raise ValidationError.single("weekday", f"Unknown weekday '{weekday}'")
    return service.summarize(weekday, top)
