"""Roster router - FastAPI endpoints for professionals"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import ProfessionalCreate, ProfessionalResponse, ProfessionalUpdate
from .service import RosterService

router = APIRouter(prefix="/professionals", tags=["Professionals"])


def get_roster_service(db: Session = Depends(get_db)) -> RosterService:
    """Dependency injection for RosterService"""
    return RosterService(db)


@router.get("", response_model=list[ProfessionalResponse])
async def list_professionals(
    include_inactive: bool = Query(True, alias="includeInactive"),
    service: RosterService = Depends(get_roster_service),
):
    return service.list_professionals(include_inactive)


@router.get("/{professional_id}", response_model=ProfessionalResponse)
async def get_professional(professional_id: int, service: RosterService = Depends(get_roster_service)):
    return service.get_professional(professional_id)


@router.post("", response_model=ProfessionalResponse, status_code=status.HTTP_201_CREATED)
async def create_professional(data: ProfessionalCreate, service: RosterService = Depends(get_roster_service)):
    return service.create_professional(data)


@router.patch("/{professional_id}", response_model=ProfessionalResponse)
async def update_professional(
    professional_id: int,
    data: ProfessionalUpdate,
    service: RosterService = Depends(get_roster_service),
):
    return service.update_professional(professional_id, data)


@router.delete("/{professional_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_professional(professional_id: int, service: RosterService = Depends(get_roster_service)):
    service.delete_professional(professional_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
