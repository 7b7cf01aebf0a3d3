import unittest

from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from tests.support import DatabaseTestCase

from scheduleboard.database import translate_storage_errors
from scheduleboard.domain.assignments.reconciler import WriteReconciler
from scheduleboard.domain.assignments.repository import AssignmentRepository
from scheduleboard.domain.assignments.schemas import AssignmentDraft
from scheduleboard.domain.catalog.repository import ActivityKindRepository
from scheduleboard.domain.catalog.schemas import ActivityKindCreate
from scheduleboard.domain.catalog.service import ActivityCatalogService
from scheduleboard.domain.grid.service import GridService
from scheduleboard.domain.roster.repository import ProfessionalRepository
from scheduleboard.errors import DuplicateActivityCodeError, DuplicateAssignmentError, StorageUnavailable
from scheduleboard.seed import DEFAULT_ACTIVITY_KINDS, DEFAULT_TIME_SLOTS, seed_defaults, seed_demo_data
from scheduleboard.storage import SqlAlchemyStorage


class StaleReadStorage(SqlAlchemyStorage):
    """Misses the first lookup, like a writer whose read predates a concurrent insert"""

    def __init__(self, db):
        super().__init__(db)
        self.stale = True

    def list_assignments(self, weekday=None, professional_id=None):
        if self.stale:
            self.stale = False
            return []
        return super().list_assignments(weekday, professional_id)


class TestSqlAlchemyStorage(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        self.paulo = ProfessionalRepository.create_professional(self.db, name="Prof. Paulo", initials="PP")
        self.record = {
            "professional_id": self.paulo.id,
            "weekday": "segunda",
            "start_time": "08:00",
            "end_time": "09:00",
            "activity_code": "aula",
            "location": None,
            "notes": None,
        }

    def test_unique_constraint_rejects_duplicate(self):
        AssignmentRepository.create_assignment(self.db, **self.record)
        with self.assertRaises(DuplicateAssignmentError):
            AssignmentRepository.create_assignment(self.db, **dict(self.record, activity_code="reuniao"))
        self.assertEqual(len(AssignmentRepository.get_assignments(self.db)), 1)

    def test_stale_read_insert_becomes_update(self):
        SqlAlchemyStorage(self.db).insert_assignment(self.record)
        reconciler = WriteReconciler(StaleReadStorage(self.db), on_change=lambda weekday: None)

        assignment, created = reconciler.upsert(
            AssignmentDraft(
                professionalId=self.paulo.id, weekday="segunda", startTime="08:00", endTime="09:00", activity="estudo"
            )
        )

        self.assertFalse(created)
        stored = AssignmentRepository.get_assignments(self.db)
        self.assertEqual([(a.id, a.activity_code) for a in stored], [(assignment.id, "estudo")])

    def test_update_and_delete_missing(self):
        storage = SqlAlchemyStorage(self.db)
        self.assertIsNone(storage.update_assignment(404, {"notes": "x"}))
        self.assertFalse(storage.delete_assignment(404))


class StaleCodeLookupRepository(ActivityKindRepository):
    """Misses the first code lookup, like a writer racing another insert of the same code"""

    def __init__(self):
        self.stale = True

    def get_kind_by_code(self, db, code):
        if self.stale:
            self.stale = False
            return None
        return ActivityKindRepository.get_kind_by_code(db, code)


class TestActivityCatalogRace(DatabaseTestCase):
    def test_duplicate_code_insert_becomes_update(self):
        ActivityKindRepository.create_kind(self.db, code="aula", name="Aula", color="#3b82f6")
        service = ActivityCatalogService(self.db)
        service.repo = StaleCodeLookupRepository()

        kind, created = service.upsert_kind(ActivityKindCreate(code="aula", name="Aula regular", color="#1d4ed8"))

        self.assertFalse(created)
        kinds = ActivityKindRepository.get_kinds(self.db)
        self.assertEqual([(k.id, k.name, k.color) for k in kinds], [(kind.id, "Aula regular", "#1d4ed8")])

    def test_repository_reports_duplicate_code(self):
        ActivityKindRepository.create_kind(self.db, code="aula", name="Aula", color="#3b82f6")
        with self.assertRaises(DuplicateActivityCodeError):
            ActivityKindRepository.create_kind(self.db, code="aula", name="Outra", color="#000000")
        self.assertEqual(len(ActivityKindRepository.get_kinds(self.db)), 1)


class TestStorageErrors(unittest.TestCase):
    def test_operational_error_becomes_storage_unavailable(self):
        @translate_storage_errors
        def query():
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        with self.assertRaises(StorageUnavailable) as ctx:
            query()
        self.assertEqual(ctx.exception.status_code, 503)

    def test_unreachable_database(self):
        engine = create_engine("sqlite:////nonexistent-dir/scheduleboard.db")
        try:
            with Session(engine) as db:
                with self.assertRaises(StorageUnavailable):
                    SqlAlchemyStorage(db).list_professionals()
        finally:
            engine.dispose()


class TestSeed(DatabaseTestCase):
    def test_defaults_fill_empty_tables_once(self):
        created = seed_defaults(self.db)
        self.assertEqual(created, {"activity_kinds": len(DEFAULT_ACTIVITY_KINDS), "time_slots": len(DEFAULT_TIME_SLOTS)})
        self.assertEqual(seed_defaults(self.db), {"activity_kinds": 0, "time_slots": 0})

    def test_default_slots_are_contiguous_half_hours(self):
        self.assertEqual(DEFAULT_TIME_SLOTS[0], ("08:00", "08:30"))
        self.assertEqual(DEFAULT_TIME_SLOTS[-1], ("17:30", "18:00"))
        self.assertNotIn(("12:00", "12:30"), DEFAULT_TIME_SLOTS)

    def test_demo_data_resolves_onto_both_grids(self):
        result = seed_demo_data(self.db)
        self.assertEqual(result["professionals"], 5)

        storage = SqlAlchemyStorage(self.db)
        grid = GridService(storage, min_cell_height=70).get_grid("segunda")
        rows = {(r.slot.startTime, r.slot.endTime): r for r in grid.rows}

        custom = rows[("08:00", "09:30")].cells[0]
        self.assertEqual(custom.activity.code, "aula")
        self.assertEqual(custom.spanRatio, 1.0)

        base = rows[("08:00", "08:30")].cells[0]
        self.assertEqual(base.assignmentId, custom.assignmentId)
        self.assertEqual(base.spanRatio, 3.0)
        self.assertEqual(base.height, 210.0)

        base_only = GridService(storage, min_cell_height=70).get_grid("segunda", base_only=True)
        self.assertTrue(all(r.slot.isBaseSlot for r in base_only.rows))

    def test_demo_data_is_idempotent(self):
        seed_demo_data(self.db)
        first = len(AssignmentRepository.get_assignments(self.db))
        seed_demo_data(self.db)
        self.assertEqual(len(AssignmentRepository.get_assignments(self.db)), first)


if __name__ == "__main__":
    unittest.main(verbosity=2)
