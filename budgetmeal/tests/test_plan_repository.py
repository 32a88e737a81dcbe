import json, os, tempfile, shutil
import threading
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from budgetmeal.domain.Catalog import Catalog
from budgetmeal.domain.Plan import AnalysisResult
from budgetmeal.domain.errors import ValidationError
from budgetmeal.infra.Plan_Repository import PlanRepository
from budgetmeal.logic.planning.formatter import format_plan


class TestPlanRepository(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.repo = PlanRepository(Path(self.tmp_dir) / "meal_plans.json")
        self.catalog = Catalog.load([
            {"id": i, "breakfast": {"name": "Kinche", "price": 30}, "lunch": {"name": "Ful", "price": 55},
             "dinner": {"name": "Asa Tibs", "price": 100}, "total": 185}
            for i in range(1, 8)
        ])
        self.start = datetime(2026, 10, 1, 8, tzinfo=timezone.utc)

    def tearDown(self):
        shutil.rmtree(self.tmp_dir)

    def _add(self, user, meal_id, day_offset):
        plan = format_plan(self.catalog.get(meal_id), now=self.start + timedelta(days=day_offset))
        return self.repo.add_plan(user, plan)

    def test_add_assigns_id_and_persists(self):
        doc = self._add("u1", 1, 0)
        self.assertTrue(doc["id"])
        self.assertEqual(doc["notes"], "")
        self.assertIsNone(doc["aiAnalysis"])
        with open(self.repo.path, encoding="utf-8") as f:
            stored = json.load(f)
        self.assertEqual(stored["u1"][0]["mealId"], 1)

    def test_list_is_most_recent_first(self):
        self._add("u1", 1, 0)
        self._add("u1", 2, 2)
        self._add("u1", 3, 1)
        self._add("u2", 4, 5)
        self.assertEqual([p["mealId"] for p in self.repo.list_plans("u1")], [2, 3, 1])
        self.assertEqual(self.repo.recent_meal_ids("u1"), [2, 3, 1])
        self.assertEqual(self.repo.recent_meal_ids("u1", limit=2), [2, 3])
        self.assertEqual(self.repo.list_plans("nobody"), [])

    def test_notes_and_analysis(self):
        doc = self._add("u1", 1, 0)
        self.repo.save_notes("u1", doc["id"], "Buy more berbere")
        self.repo.save_analysis("u1", doc["id"], AnalysisResult(score=8, summary="Solid day."))
        stored = self.repo.get_plan("u1", doc["id"])
        self.assertEqual(stored["notes"], "Buy more berbere")
        self.assertEqual(stored["aiAnalysis"], {"score": 8, "summary": "Solid day."})
        self.assertIsNone(self.repo.save_notes("u1", "missing", "x"))

    def test_remove_meal_updates_totals(self):
        doc = self._add("u1", 1, 0)
        updated = self.repo.remove_meal("u1", doc["id"], 2)
        self.assertEqual([m["name"] for m in updated["meals"]], ["Kinche", "Ful"])
        self.assertEqual(updated["total_estimated_cost"], 85)
        self.assertEqual(updated["total_calories"], 1000)
        self.assertEqual(self.repo.get_plan("u1", doc["id"])["total_estimated_cost"], 85)

    def test_remove_last_meal_is_rejected(self):
        doc = self._add("u1", 1, 0)
        self.repo.remove_meal("u1", doc["id"], 0)
        self.repo.remove_meal("u1", doc["id"], 0)
        with self.assertRaises(ValidationError):
            self.repo.remove_meal("u1", doc["id"], 0)
        self.assertEqual(len(self.repo.get_plan("u1", doc["id"])["meals"]), 1)

    def test_delete_plan(self):
        doc = self._add("u1", 1, 0)
        self.assertTrue(self.repo.delete_plan("u1", doc["id"]))
        self.assertFalse(self.repo.delete_plan("u1", doc["id"]))

    def test_concurrent_adds_keep_every_plan(self):
        plan = format_plan(self.catalog.get(1), now=self.start)
        threads = [threading.Thread(target=self.repo.add_plan, args=("u1", plan)) for _ in range(40)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        plans = self.repo.list_plans("u1")
        self.assertEqual(len(plans), 40)
        self.assertEqual(len({p["id"] for p in plans}), 40)

    def test_concurrent_notes_on_different_plans(self):
        docs = [self._add("u1", 1, day) for day in range(10)]
        threads = [threading.Thread(target=self.repo.save_notes, args=("u1", d["id"], f"note {i}"))
                   for i, d in enumerate(docs)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        for i, d in enumerate(docs):
            self.assertEqual(self.repo.get_plan("u1", d["id"])["notes"], f"note {i}")

    def test_corrupt_store_reads_as_empty(self):
        with open(self.repo.path, "w", encoding="utf-8") as f:
            f.write("{not json")
        self.assertEqual(self.repo.list_plans("u1"), [])
        self._add("u1", 1, 0)
        self.assertEqual(len(self.repo.list_plans("u1")), 1)
        self.assertFalse([n for n in os.listdir(self.tmp_dir) if n.startswith(".plans_")])


if __name__ == '__main__':
    unittest.main()
