"""Assignment router - FastAPI endpoints for assignment writes and lookups"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from ...database import get_db
from ...errors import NotFoundError, ValidationError
from ...shared.weekdays import is_weekday
from ...storage import SqlAlchemyStorage
from .reconciler import WriteReconciler
from .schemas import (
    AssignmentDraft,
    AssignmentPatch,
    AssignmentResponse,
    BatchAssignmentRequest,
    BatchResponse,
    assignment_to_response,
)

router = APIRouter(prefix="/assignments", tags=["Assignments"])


def get_storage(db: Session = Depends(get_db)) -> SqlAlchemyStorage:
    return SqlAlchemyStorage(db)


def get_reconciler(storage: SqlAlchemyStorage = Depends(get_storage)) -> WriteReconciler:
    """Dependency injection for WriteReconciler"""
    return WriteReconciler(storage)


@router.get("", response_model=list[AssignmentResponse])
async def list_assignments(
    professional_id: Optional[int] = Query(None, alias="professionalId"),
    weekday: Optional[str] = Query(None),
    storage: SqlAlchemyStorage = Depends(get_storage),
):
    """List assignments, filtered by professional and/or weekday"""
    if weekday is not None and not is_weekday(weekday):
        raise ValidationError.single("weekday", f"Unknown weekday '{weekday}'")
    return [assignment_to_response(a) for a in storage.list_assignments(weekday, professional_id)]


@router.get("/{assignment_id}", response_model=AssignmentResponse)
async def get_assignment(assignment_id: int, storage: SqlAlchemyStorage = Depends(get_storage)):
    assignment = storage.get_assignment(assignment_id)
    if not assignment:
        raise NotFoundError("Assignment", assignment_id)
    return assignment_to_response(assignment)


@router.post("", response_model=AssignmentResponse)
async def upsert_assignment(
    data: AssignmentDraft,
    response: Response,
    reconciler: WriteReconciler = Depends(get_reconciler),
):
    """
    Create an assignment. When the professional already has an assignment with
    the same weekday and time range, that one is updated instead (200 vs 201).
    """
    assignment, created = reconciler.upsert(data)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return assignment_to_response(assignment)


@router.post("/batch", response_model=BatchResponse)
async def batch_upsert_assignments(
    data: BatchAssignmentRequest,
    reconciler: WriteReconciler = Depends(get_reconciler),
):
    """Paint one activity onto several cells. Each target reports its own outcome."""
    results = reconciler.upsert_batch(data)
    failed = sum(1 for r in results if r.status == "error")
    return BatchResponse(results=results, succeeded=len(results) - failed, failed=failed)


@router.patch("/{assignment_id}", response_model=AssignmentResponse)
async def update_assignment(
    assignment_id: int,
    data: AssignmentPatch,
    reconciler: WriteReconciler = Depends(get_reconciler),
):
    return assignment_to_response(reconciler.update(assignment_id, data))


@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_assignment(assignment_id: int, reconciler: WriteReconciler = Depends(get_reconciler)):
    reconciler.delete(assignment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
