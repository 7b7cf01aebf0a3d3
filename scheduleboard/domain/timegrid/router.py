"""Time grid router - FastAPI endpoints for time slots"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import TimeSlotCreate, TimeSlotResponse, slot_to_response
from .service import TimeGridService

router = APIRouter(prefix="/time-slots", tags=["Time Slots"])


def get_time_grid_service(db: Session = Depends(get_db)) -> TimeGridService:
    """Dependency injection for TimeGridService"""
    return TimeGridService(db)


@router.get("", response_model=list[TimeSlotResponse])
async def list_time_slots(
    base_only: bool = Query(False, alias="baseOnly"),
    service: TimeGridService = Depends(get_time_grid_service),
):
    return [slot_to_response(s) for s in service.list_slots(base_only)]


@router.post("", response_model=TimeSlotResponse, status_code=status.HTTP_201_CREATED)
async def create_time_slot(data: TimeSlotCreate, service: TimeGridService = Depends(get_time_grid_service)):
    return slot_to_response(service.create_slot(data))


@router.delete("/{slot_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_time_slot(slot_id: int, service: TimeGridService = Depends(get_time_grid_service)):
    service.delete_slot(slot_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
