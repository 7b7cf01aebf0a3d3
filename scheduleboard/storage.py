"""
Storage collaborator used by the grid resolver and the write reconciler.

Two interchangeable implementations share the ScheduleStorage contract:

- SqlAlchemyStorage: the production store, one per request session
- MemoryStorage: an in-process store for tests and scripts

Both enforce the (professional_id, weekday, start_time, end_time) uniqueness
of assignments by raising DuplicateAssignmentError on a colliding insert.
"""

import logging
from abc import ABC, abstractmethod
from itertools import count
from typing import Optional

from sqlalchemy.orm import Session

from .database import translate_storage_errors
from .domain.assignments.repository import AssignmentRepository
from .domain.catalog.repository import ActivityKindRepository
from .domain.roster.repository import ProfessionalRepository
from .domain.timegrid.repository import TimeSlotRepository
from .errors import DuplicateAssignmentError
from .models import ActivityKind, Assignment, Professional, TimeSlot, utcnow

logger = logging.getLogger(__name__)


class ScheduleStorage(ABC):
    """Capability set the core logic needs from a backing store"""

    @abstractmethod
    def list_professionals(self, include_inactive: bool = True) -> list[Professional]: ...

    @abstractmethod
    def get_professional(self, professional_id: int) -> Optional[Professional]: ...

    @abstractmethod
    def list_activity_kinds(self) -> list[ActivityKind]: ...

    @abstractmethod
    def list_time_slots(self, base_only: bool = False) -> list[TimeSlot]: ...

    @abstractmethod
    def list_assignments(
        self, weekday: Optional[str] = None, professional_id: Optional[int] = None
    ) -> list[Assignment]: ...

    @abstractmethod
    def get_assignment(self, assignment_id: int) -> Optional[Assignment]: ...

    @abstractmethod
    def insert_assignment(self, draft: dict) -> Assignment:
        """Insert a new row; raises DuplicateAssignmentError on a dedup key collision"""

    @abstractmethod
    def update_assignment(self, assignment_id: int, patch: dict) -> Optional[Assignment]:
        """Apply patch and refresh updated_at; None when the id does not exist"""

    @abstractmethod
    def delete_assignment(self, assignment_id: int) -> bool: ...


class SqlAlchemyStorage(ScheduleStorage):
    """ScheduleStorage backed by the domain repositories over one session"""

    def __init__(self, db: Session):
        self.db = db

    @translate_storage_errors
    def list_professionals(self, include_inactive: bool = True) -> list[Professional]:
        return ProfessionalRepository.get_professionals(self.db, include_inactive)

    @translate_storage_errors
    def get_professional(self, professional_id: int) -> Optional[Professional]:
        return ProfessionalRepository.get_professional_by_id(self.db, professional_id)

    @translate_storage_errors
    def list_activity_kinds(self) -> list[ActivityKind]:
        return ActivityKindRepository.get_kinds(self.db)

    @translate_storage_errors
    def list_time_slots(self, base_only: bool = False) -> list[TimeSlot]:
        return TimeSlotRepository.get_slots(self.db, base_only)

    @translate_storage_errors
    def list_assignments(
        self, weekday: Optional[str] = None, professional_id: Optional[int] = None
    ) -> list[Assignment]:
        return AssignmentRepository.get_assignments(self.db, weekday, professional_id)

    @translate_storage_errors
    def get_assignment(self, assignment_id: int) -> Optional[Assignment]:
        return AssignmentRepository.get_assignment_by_id(self.db, assignment_id)

    @translate_storage_errors
    def insert_assignment(self, draft: dict) -> Assignment:
        return AssignmentRepository.create_assignment(self.db, **draft)

    @translate_storage_errors
    def update_assignment(self, assignment_id: int, patch: dict) -> Optional[Assignment]:
        assignment = AssignmentRepository.get_assignment_by_id(self.db, assignment_id)
        if not assignment:
            return None
        return AssignmentRepository.update_assignment(self.db, assignment, **patch)

    @translate_storage_errors
    def delete_assignment(self, assignment_id: int) -> bool:
        assignment = AssignmentRepository.get_assignment_by_id(self.db, assignment_id)
        if not assignment:
            return False
        AssignmentRepository.delete_assignment(self.db, assignment)
        return True


def _dedup_key(record) -> tuple:
    return (record.professional_id, record.weekday, record.start_time, record.end_time)


class MemoryStorage(ScheduleStorage):
    """In-process ScheduleStorage holding detached model instances"""

    def __init__(self):
        self.professionals: dict[int, Professional] = {}
        self.activity_kinds: dict[int, ActivityKind] = {}
        self.time_slots: dict[int, TimeSlot] = {}
        self.assignments: dict[int, Assignment] = {}
        self._ids = {name: count(1) for name in ("professional", "kind", "slot", "assignment")}

    # Seeding helpers (the core never writes these record sets)

    def add_professional(self, name: str, initials: str, active: bool = True) -> Professional:
        professional = Professional(
            id=next(self._ids["professional"]), name=name, initials=initials, active=active
        )
        self.professionals[professional.id] = professional
        return professional

    def add_activity_kind(self, code: str, name: str, color: str = "#6b7280") -> ActivityKind:
        kind = ActivityKind(id=next(self._ids["kind"]), code=code, name=name, color=color)
        self.activity_kinds[kind.id] = kind
        return kind

    def remove_activity_kind(self, kind_id: int) -> bool:
        return self.activity_kinds.pop(kind_id, None) is not None

    def add_time_slot(
        self, start_time: str, end_time: str, interval: Optional[int] = None, is_base_slot: bool = True
    ) -> TimeSlot:
        slot = TimeSlot(
            id=next(self._ids["slot"]),
            start_time=start_time,
            end_time=end_time,
            interval=interval,
            is_base_slot=is_base_slot,
        )
        self.time_slots[slot.id] = slot
        return slot

    # ScheduleStorage

    def list_professionals(self, include_inactive: bool = True) -> list[Professional]:
        professionals = sorted(self.professionals.values(), key=lambda p: p.id)
        if include_inactive:
            return professionals
        return [p for p in professionals if p.active]

    def get_professional(self, professional_id: int) -> Optional[Professional]:
        return self.professionals.get(professional_id)

    def list_activity_kinds(self) -> list[ActivityKind]:
        return sorted(self.activity_kinds.values(), key=lambda k: k.id)

    def list_time_slots(self, base_only: bool = False) -> list[TimeSlot]:
        slots = [s for s in self.time_slots.values() if s.is_base_slot or not base_only]
        return sorted(slots, key=lambda s: (s.start_time, s.end_time, s.id))

    def list_assignments(
        self, weekday: Optional[str] = None, professional_id: Optional[int] = None
    ) -> list[Assignment]:
        assignments = [
            a
            for a in self.assignments.values()
            if (weekday is None or a.weekday == weekday)
            and (professional_id is None or a.professional_id == professional_id)
        ]
        return sorted(assignments, key=lambda a: (a.weekday, a.start_time, a.id))

    def get_assignment(self, assignment_id: int) -> Optional[Assignment]:
        return self.assignments.get(assignment_id)

    def insert_assignment(self, draft: dict) -> Assignment:
        assignment = Assignment(**draft)
        if self._find_by_key(_dedup_key(assignment)) is not None:
            raise DuplicateAssignmentError(*_dedup_key(assignment))
        assignment.id = next(self._ids["assignment"])
        assignment.updated_at = utcnow()
        self.assignments[assignment.id] = assignment
        return assignment

    def update_assignment(self, assignment_id: int, patch: dict) -> Optional[Assignment]:
        assignment = self.assignments.get(assignment_id)
        if assignment is None:
            return None

        key = (
            patch.get("professional_id", assignment.professional_id),
            patch.get("weekday", assignment.weekday),
            patch.get("start_time", assignment.start_time),
            patch.get("end_time", assignment.end_time),
        )
        other = self._find_by_key(key)
        if other is not None and other.id != assignment_id:
            raise DuplicateAssignmentError(*key)

        for field, value in patch.items():
            setattr(assignment, field, value)
        assignment.updated_at = utcnow()
        return assignment

    def delete_assignment(self, assignment_id: int) -> bool:
        return self.assignments.pop(assignment_id, None) is not None

    def _find_by_key(self, key: tuple) -> Optional[Assignment]:
        for assignment in self.assignments.values():
            if _dedup_key(assignment) == key:
                return assignment
        return None
