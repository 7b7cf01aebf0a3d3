"""Assignment domain schemas - Pydantic models for write payloads and responses"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# "activityCode" is accepted as an input alias of "activity"
ACTIVITY_ALIASES = AliasChoices("activity", "activityCode")


class AssignmentDraft(BaseModel):
    """
    Candidate assignment for an upsert. Fields are optional here so that the
    reconciler can report every missing or malformed field at once.
    """

    model_config = ConfigDict(populate_by_name=True)

    professionalId: Optional[int] = None
    weekday: Optional[str] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    activity: Optional[str] = Field(default=None, validation_alias=ACTIVITY_ALIASES)
    location: Optional[str] = None
    notes: Optional[str] = None


class AssignmentPatch(BaseModel):
    """Partial update; only fields present in the payload are applied"""

    model_config = ConfigDict(populate_by_name=True)

    professionalId: Optional[int] = None
    weekday: Optional[str] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    activity: Optional[str] = Field(default=None, validation_alias=ACTIVITY_ALIASES)
    location: Optional[str] = None
    notes: Optional[str] = None


class BatchTarget(BaseModel):
    """One (professional, weekday, time range) cell to paint"""

    professionalId: Optional[int] = None
    weekday: Optional[str] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None


class BatchAssignmentRequest(BaseModel):
    """Apply one activity definition to several cells"""

    model_config = ConfigDict(populate_by_name=True)

    activity: Optional[str] = Field(default=None, validation_alias=ACTIVITY_ALIASES)
    location: Optional[str] = None
    notes: Optional[str] = None
    targets: list[BatchTarget] = Field(min_length=1)


class AssignmentResponse(BaseModel):
    id: int
    professionalId: int
    weekday: str
    startTime: str
    endTime: str
    activity: str
    location: Optional[str] = None
    notes: Optional[str] = None
    updatedAt: Optional[datetime] = None


class BatchResult(BaseModel):
    index: int
    target: BatchTarget
    status: Literal["created", "updated", "error"]
    assignment: Optional[AssignmentResponse] = None
    message: Optional[str] = None
    errors: Optional[list[dict]] = None


class BatchResponse(BaseModel):
    results: list[BatchResult]
    succeeded: int
    failed: int


def assignment_to_response(assignment) -> AssignmentResponse:
    return AssignmentResponse(
        id=assignment.id,
        professionalId=assignment.professional_id,
        weekday=assignment.weekday,
        startTime=assignment.start_time,
        endTime=assignment.end_time,
        activity=assignment.activity_code,
        location=assignment.location,
        notes=assignment.notes,
        updatedAt=assignment.updated_at,
    )
