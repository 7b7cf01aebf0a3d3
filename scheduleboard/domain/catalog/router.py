"""Activity catalog router - FastAPI endpoints for activity kinds"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import ActivityKindCreate, ActivityKindResponse, ActivityKindUpdate
from .service import ActivityCatalogService

router = APIRouter(prefix="/activity-kinds", tags=["Activity Kinds"])


def get_catalog_service(db: Session = Depends(get_db)) -> ActivityCatalogService:
    """Dependency injection for ActivityCatalogService"""
    return ActivityCatalogService(db)


@router.get("", response_model=list[ActivityKindResponse])
async def list_activity_kinds(service: ActivityCatalogService = Depends(get_catalog_service)):
    return service.list_kinds()


@router.post("", response_model=ActivityKindResponse)
async def upsert_activity_kind(
    data: ActivityKindCreate,
    response: Response,
    service: ActivityCatalogService = Depends(get_catalog_service),
):
    """Create an activity kind, or update the one that already uses this code"""
    kind, created = service.upsert_kind(data)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return kind


@router.patch("/{kind_id}", response_model=ActivityKindResponse)
async def update_activity_kind(
    kind_id: int,
    data: ActivityKindUpdate,
    service: ActivityCatalogService = Depends(get_catalog_service),
):
    return service.update_kind(kind_id, data)


@router.delete("/{kind_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity_kind(
    kind_id: int,
    service: ActivityCatalogService = Depends(get_catalog_service),
):
    """Remove an activity kind. Assignments using it render with the neutral kind."""
    service.remove_kind(kind_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
