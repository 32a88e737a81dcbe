import random
import unittest
from budgetmeal.domain.Catalog import Catalog
from budgetmeal.domain.UserProfile import UserProfile
from budgetmeal.domain.errors import InvariantViolation
from budgetmeal.logic.selection.selector import (
    DelegatedStrategy, LocalStrategy, PlanSelector, build_strategy, parse_selected_id,
)
from budgetmeal.domain.errors import ExternalServiceFailure


def _catalog(n):
    return Catalog.load([
        {"id": i, "breakfast": {"name": f"Firfir {i}", "price": 20}, "lunch": {"name": f"Shiro {i}", "price": 40},
         "dinner": {"name": f"Misir {i}", "price": 40 + i}, "total": 100 + i}
        for i in range(1, n + 1)
    ])


class FirstRng:
    """Deterministic stand-in for random.Random: choice -> last item, sample -> first k items."""

    def choice(self, seq):
        return seq[-1]

    def sample(self, population, k):
        return list(population)[:k]


class RecordingScorer:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply


class TestPlanSelector(unittest.TestCase):

    def setUp(self):
        self.candidates = _catalog(15).all()
        self.profile = UserProfile(monthly_budget=3000, goals="Weight Loss", allergies=["peanuts"])

    def test_empty_candidates_fail_fast(self):
        with self.assertRaises(InvariantViolation):
            PlanSelector().select([], self.profile)

    def test_single_candidate_is_returned(self):
        single = _catalog(1).all()
        self.assertEqual(PlanSelector(LocalStrategy(FirstRng())).select(single, self.profile).id, 1)
        scorer = RecordingScorer(reply="nonsense")
        self.assertEqual(PlanSelector(DelegatedStrategy(scorer, FirstRng())).select(single, self.profile).id, 1)

    def test_local_uses_injected_rng(self):
        chosen = PlanSelector(LocalStrategy(FirstRng())).select(self.candidates, self.profile)
        self.assertEqual(chosen.id, 15)

    def test_local_seeded_rng_is_reproducible(self):
        a = PlanSelector(LocalStrategy(random.Random(42))).select(self.candidates, self.profile)
        b = PlanSelector(LocalStrategy(random.Random(42))).select(self.candidates, self.profile)
        self.assertEqual(a.id, b.id)
        self.assertIn(a, self.candidates)

    def test_delegated_uses_selected_id(self):
        scorer = RecordingScorer(reply='{"selectedId": 4}')
        chosen = PlanSelector(DelegatedStrategy(scorer, FirstRng())).select(self.candidates, self.profile, [9])
        self.assertEqual(chosen.id, 4)
        self.assertEqual(len(scorer.prompts), 1)
        self.assertIn("Weight Loss", scorer.prompts[0])
        self.assertIn("[9]", scorer.prompts[0])

    def test_delegated_accepts_fenced_reply_and_string_id(self):
        scorer = RecordingScorer(reply='Here you go:\n```json\n{"selectedId": "7"}\n```')
        chosen = PlanSelector(DelegatedStrategy(scorer, FirstRng())).select(self.candidates, self.profile)
        self.assertEqual(chosen.id, 7)

    def test_shortlist_is_bounded(self):
        strategy = DelegatedStrategy(RecordingScorer(), random.Random(1), shortlist_size=10)
        shortlist = strategy.shortlist(self.candidates)
        self.assertEqual(len(shortlist), 10)
        self.assertEqual(len({c.id for c in shortlist}), 10)
        self.assertEqual(len(strategy.shortlist(self.candidates[:3])), 3)

    def test_malformed_json_falls_back_to_shortlist(self):
        scorer = RecordingScorer(reply="I think number four looks great {selectedId: four")
        chosen = PlanSelector(DelegatedStrategy(scorer, FirstRng())).select(self.candidates, self.profile)
        # FirstRng shortlist = first 10 candidates, local pick = last of them
        self.assertEqual(chosen.id, 10)

    def test_unknown_id_falls_back_to_shortlist(self):
        scorer = RecordingScorer(reply='{"selectedId": 14}')  # outside the first-10 shortlist
        chosen = PlanSelector(DelegatedStrategy(scorer, FirstRng())).select(self.candidates, self.profile)
        self.assertEqual(chosen.id, 10)

    def test_service_error_falls_back(self):
        scorer = RecordingScorer(error=ConnectionError("unreachable"))
        with self.assertLogs("budgetmeal.logic.selection.selector", level="WARNING"):
            chosen = PlanSelector(DelegatedStrategy(scorer, random.Random(3))).select(self.candidates, self.profile)
        self.assertIn(chosen, self.candidates)

    def test_fallback_always_returns_member(self):
        replies = [None, "", "[]", '{"selectedId": null}', '{"selectedId": true}', '{"other": 1}', "{{{"]
        for seed, reply in enumerate(replies):
            strategy = DelegatedStrategy(RecordingScorer(reply=reply), random.Random(seed))
            chosen = PlanSelector(strategy).select(self.candidates, self.profile)
            self.assertIn(chosen, self.candidates)

    def test_build_strategy(self):
        self.assertIsInstance(build_strategy(None), LocalStrategy)
        self.assertIsInstance(build_strategy(RecordingScorer()), DelegatedStrategy)

    def test_parse_selected_id(self):
        self.assertEqual(parse_selected_id('{"selectedId": 3,}'), 3)
        with self.assertRaises(ExternalServiceFailure):
            parse_selected_id('{"score": 3}')
        with self.assertRaises(ExternalServiceFailure):
            parse_selected_id("no json here")


if __name__ == '__main__':
    unittest.main()
