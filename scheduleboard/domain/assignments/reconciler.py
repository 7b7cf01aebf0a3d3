"""
Write reconciler - validated assignment writes that never duplicate a cell.

(professional, weekday, start, end) identifies a cell. Writing to a cell that
already holds an assignment updates that record in place. The storage layer
enforces the same key with a unique constraint; an insert that loses a race
to a concurrent writer is turned into an update of the winning row.
"""

import logging
from typing import Callable, Optional

from ...cache import invalidate_grid_cache
from ...errors import (
    DuplicateAssignmentError,
    NotFoundError,
    ScheduleBoardError,
    ValidationError,
)
from ...models import Assignment
from ...shared.validators import validate_time_range
from ...shared.weekdays import WEEKDAYS, is_weekday
from ...storage import ScheduleStorage
from .schemas import (
    AssignmentDraft,
    AssignmentPatch,
    BatchAssignmentRequest,
    BatchResult,
    assignment_to_response,
)

logger = logging.getLogger(__name__)


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class WriteReconciler:
    """Create/update/delete assignments against a ScheduleStorage"""

    def __init__(
        self,
        storage: ScheduleStorage,
        on_change: Callable[[str], object] = invalidate_grid_cache,
    ):
        self.storage = storage
        self.on_change = on_change

    def validate(self, draft: AssignmentDraft, check_professional: bool = True) -> dict:
        """
        Check a draft and convert it to storage fields. With check_professional
        False the professional id only has to be present, so records whose
        professional was removed stay editable.

        Raises:
            ValidationError: With one entry per offending field
        """
        errors = []

        if draft.professionalId is None:
            errors.append({"field": "professionalId", "message": "professionalId is required"})
        elif check_professional and self.storage.get_professional(draft.professionalId) is None:
            errors.append(
                {"field": "professionalId", "message": f"Professional {draft.professionalId} does not exist"}
            )

        if not is_weekday(draft.weekday):
            errors.append({"field": "weekday", "message": f"weekday must be one of: {', '.join(WEEKDAYS)}"})

        errors.extend(validate_time_range(draft.startTime, draft.endTime))

        activity = _clean_text(draft.activity)
        if not activity:
            errors.append({"field": "activity", "message": "activity is required"})

        if errors:
            raise ValidationError(errors)

        return {
            "professional_id": draft.professionalId,
            "weekday": draft.weekday,
            "start_time": draft.startTime,
            "end_time": draft.endTime,
            "activity_code": activity,
            "location": _clean_text(draft.location),
            "notes": _clean_text(draft.notes),
        }

    def find_existing(self, record: dict) -> Optional[Assignment]:
        """Scan the record's weekday for an assignment with the same professional and range"""
        for assignment in self.storage.list_assignments(weekday=record["weekday"]):
            if (
                assignment.professional_id == record["professional_id"]
                and assignment.start_time == record["start_time"]
                and assignment.end_time == record["end_time"]
            ):
                return assignment
        return None

    @staticmethod
    def _values(record: dict) -> dict:
        return {
            "activity_code": record["activity_code"],
            "location": record["location"],
            "notes": record["notes"],
        }

    def upsert(self, draft: AssignmentDraft) -> tuple[Assignment, bool]:
        """
        Create an assignment or merge into the one already holding its cell.

        Returns:
            (assignment, created): created is False when an existing record was updated
        """
        record = self.validate(draft)

        existing = self.find_existing(record)
        if existing is None:
            try:
                assignment = self.storage.insert_assignment(record)
                created = True
            except DuplicateAssignmentError:
                existing = self.find_existing(record)
                if existing is None:
                    raise
                logger.info(f"🔁 Insert lost a race for assignment {existing.id}, updating it instead")

        if existing is not None:
            assignment = self.storage.update_assignment(existing.id, self._values(record))
            created = False

        if created:
            logger.info(
                f"✅ Created assignment {assignment.id}: professional {assignment.professional_id} "
                f"{assignment.weekday} {assignment.start_time}-{assignment.end_time} ({assignment.activity_code})"
            )
        else:
            logger.info(f"✅ Merged write into existing assignment {assignment.id} ({assignment.activity_code})")

        self.on_change(record["weekday"])
        return assignment, created

    def upsert_batch(self, request: BatchAssignmentRequest) -> list[BatchResult]:
        """Upsert the same activity into every target cell; each target succeeds or fails on its own"""
        results = []
        for index, target in enumerate(request.targets):
            draft = AssignmentDraft(
                professionalId=target.professionalId,
                weekday=target.weekday,
                startTime=target.startTime,
                endTime=target.endTime,
                activity=request.activity,
                location=request.location,
                notes=request.notes,
            )
            try:
                assignment, created = self.upsert(draft)
            except ValidationError as e:
                results.append(
                    BatchResult(index=index, target=target, status="error", message=e.message, errors=e.errors)
                )
                continue
            except ScheduleBoardError as e:
                logger.error(f"❌ Batch target {index} failed: {e.message}")
                results.append(BatchResult(index=index, target=target, status="error", message=e.message))
                continue

            results.append(
                BatchResult(
                    index=index,
                    target=target,
                    status="created" if created else "updated",
                    assignment=assignment_to_response(assignment),
                )
            )

        failed = sum(1 for r in results if r.status == "error")
        logger.info(f"📦 Batch upsert: {len(results) - failed} succeeded, {failed} failed")
        return results

    def update(self, assignment_id: int, patch: AssignmentPatch) -> Assignment:
        """
        Apply a partial update. If the new key collides with another record,
        that record absorbs the values and this one is removed.

        Raises:
            NotFoundError: If the assignment does not exist
            ValidationError: If the merged values are invalid
        """
        current = self.storage.get_assignment(assignment_id)
        if current is None:
            raise NotFoundError("Assignment", assignment_id)

        changes = patch.model_dump(exclude_unset=True)
        merged = AssignmentDraft(
            professionalId=changes.get("professionalId", current.professional_id),
            weekday=changes.get("weekday", current.weekday),
            startTime=changes.get("startTime", current.start_time),
            endTime=changes.get("endTime", current.end_time),
            activity=changes.get("activity", current.activity_code),
            location=changes.get("location", current.location),
            notes=changes.get("notes", current.notes),
        )
        moved = changes.get("professionalId", current.professional_id) != current.professional_id
        record = self.validate(merged, check_professional=moved)
        previous_weekday = current.weekday

        collision = self.find_existing(record)
        if collision is not None and collision.id != assignment_id:
            assignment = self.storage.update_assignment(collision.id, self._values(record))
            self.storage.delete_assignment(assignment_id)
            logger.info(f"🔀 Assignment {assignment_id} merged into {collision.id}")
        else:
            assignment = self.storage.update_assignment(assignment_id, record)
            logger.info(f"✅ Updated assignment {assignment_id}")

        self.on_change(previous_weekday)
        if record["weekday"] != previous_weekday:
            self.on_change(record["weekday"])
        return assignment

    def delete(self, assignment_id: int) -> None:
        """
        Raises:
            NotFoundError: If the assignment does not exist
        """
        current = self.storage.get_assignment(assignment_id)
        if current is None:
            raise NotFoundError("Assignment", assignment_id)
        weekday = current.weekday
        self.storage.delete_assignment(assignment_id)
        logger.info(f"🗑️ Deleted assignment {assignment_id}")
        self.on_change(weekday)
