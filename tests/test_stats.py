import unittest

from scheduleboard.domain.assignments.reconciler import WriteReconciler
from scheduleboard.domain.assignments.schemas import AssignmentDraft
from scheduleboard.domain.stats.service import StatsService, summarize_assignments
from scheduleboard.storage import MemoryStorage


class TestStats(unittest.TestCase):
    def setUp(self):
        self.storage = MemoryStorage()
        self.storage.add_activity_kind("aula", "Aula", "#3b82f6")
        self.storage.add_activity_kind("reuniao", "Reunião", "#8b5cf6")
        paulo = self.storage.add_professional("Prof. Paulo", "PP")
        ana = self.storage.add_professional("Profa. Ana Maria", "AM")

        reconciler = WriteReconciler(self.storage, on_change=lambda weekday: None)
        rows = [
            (paulo.id, "segunda", "08:00", "09:30", "aula"),
            (ana.id, "segunda", "08:00", "09:30", "aula"),
            (paulo.id, "segunda", "09:45", "11:15", "reuniao"),
            (ana.id, "terca", "08:00", "08:30", "curso"),
            (paulo.id, "terca", "08:00", "09:00", "reuniao"),
        ]
        for pid, weekday, start, end, code in rows:
            reconciler.upsert(
                AssignmentDraft(professionalId=pid, weekday=weekday, startTime=start, endTime=end, activity=code)
            )

    def test_whole_week(self):
        stats = StatsService(self.storage).summarize()

        self.assertIsNone(stats.weekday)
        self.assertEqual(stats.totalAssignments, 5)
        self.assertEqual(stats.totalMinutes, 90 + 90 + 90 + 30 + 60)
        # ties on count are broken by code
        self.assertEqual([(a.code, a.count) for a in stats.byActivity], [("aula", 2), ("reuniao", 2), ("curso", 1)])
        self.assertEqual(stats.byWeekday["segunda"], 3)
        self.assertEqual(stats.byWeekday["terca"], 2)
        self.assertEqual(stats.byWeekday["domingo"], 0)

    def test_unknown_code_reported_under_itself(self):
        stats = StatsService(self.storage).summarize()
        curso = [a for a in stats.byActivity if a.code == "curso"][0]
        self.assertFalse(curso.known)
        self.assertEqual(curso.name, "curso")
        self.assertEqual(curso.minutes, 30)

    def test_single_weekday_and_top(self):
        stats = StatsService(self.storage).summarize(weekday="segunda", top=1)
        self.assertEqual(stats.totalAssignments, 3)
        self.assertEqual(len(stats.byActivity), 1)
        self.assertEqual(stats.byActivity[0].code, "aula")
        self.assertEqual(stats.byActivity[0].name, "Aula")
        self.assertEqual(stats.byActivity[0].minutes, 180)

    def test_empty_store(self):
        stats = summarize_assignments([], [])
        self.assertEqual(stats.totalAssignments, 0)
        self.assertEqual(stats.byActivity, [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
