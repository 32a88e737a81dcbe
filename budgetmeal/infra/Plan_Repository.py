import json, os, tempfile, shutil
import logging
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Optional
from uuid import uuid4

from budgetmeal.domain.MealCombination import MealId
from budgetmeal.domain.Plan import AnalysisResult, GeneratedPlan
from budgetmeal.infra.paths import PLANS_FILE
from budgetmeal.logic.planning.formatter import recompute_after_meal_removal

logger = logging.getLogger(__name__)

# Serialises load-modify-write cycles; FastAPI runs sync routes in a threadpool.
_lock = Lock()


class PlanRepository:
    """JSON file store of generated plans, keyed by user id.

    Layout: { "<user_id>": [ {id, date, total_estimated_cost, total_calories,
    mealId, meals, notes, aiAnalysis}, ... ] }, oldest first.
    Read errors on a corrupt file are logged and treated as an empty store;
    write errors propagate to the caller. Writes hold a process-wide lock, so
    several processes sharing one store file are not supported.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or PLANS_FILE)

    def _load(self) -> Dict[str, List[Dict[str, Any]]]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                store = json.load(f) or {}
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in plan store {self.path}: {e}")
            return {}
        return store if isinstance(store, dict) else {}

    def _atomic_write(self, store: Dict[str, List[Dict[str, Any]]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".plans_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(store, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, str(self.path))
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    # --- reads ---
    def list_plans(self, user_id: str) -> List[Dict[str, Any]]:
        """Plans of a user, most recent first."""
        plans = self._load().get(user_id, [])
        return sorted(plans, key=lambda p: p.get("date") or "", reverse=True)

    def get_plan(self, user_id: str, plan_id: str) -> Optional[Dict[str, Any]]:
        for doc in self._load().get(user_id, []):
            if doc.get("id") == plan_id:
                return doc
        return None

    def recent_meal_ids(self, user_id: str, limit: Optional[int] = None) -> List[MealId]:
        """Catalog ids of the user's plans, most recent first (plans without mealId skipped)."""
        ids = [p.get("mealId") for p in self.list_plans(user_id) if p.get("mealId") is not None]
        return ids[:limit] if limit is not None else ids

    # --- writes ---
    def add_plan(self, user_id: str, plan: GeneratedPlan) -> Dict[str, Any]:
        doc = plan.to_dict()
        doc["id"] = uuid4().hex
        doc["notes"] = ""
        doc["aiAnalysis"] = None
        with _lock:
            store = self._load()
            store.setdefault(user_id, []).append(doc)
            self._atomic_write(store)
        return doc

    def _update(self, user_id: str, plan_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with _lock:
            store = self._load()
            for doc in store.get(user_id, []):
                if doc.get("id") == plan_id:
                    doc.update(changes)
                    self._atomic_write(store)
                    return doc
        return None

    def save_notes(self, user_id: str, plan_id: str, notes: str) -> Optional[Dict[str, Any]]:
        return self._update(user_id, plan_id, {"notes": notes or ""})

    def save_analysis(self, user_id: str, plan_id: str, analysis: AnalysisResult) -> Optional[Dict[str, Any]]:
        return self._update(user_id, plan_id, {"aiAnalysis": analysis.to_dict()})

    def remove_meal(self, user_id: str, plan_id: str, index: int) -> Optional[Dict[str, Any]]:
        """Drop one meal and store recomputed totals. ValidationError propagates."""
        with _lock:
            store = self._load()
            for doc in store.get(user_id, []):
                if doc.get("id") != plan_id:
                    continue
                updated = recompute_after_meal_removal(GeneratedPlan.from_dict(doc), index)
                doc.update({
                    "meals": [m.to_dict() for m in updated.meals],
                    "total_estimated_cost": updated.total_estimated_cost,
                    "total_calories": updated.total_calories,
                })
                self._atomic_write(store)
                return doc
        return None

    def delete_plan(self, user_id: str, plan_id: str) -> bool:
        with _lock:
            store = self._load()
            plans = store.get(user_id, [])
            kept = [p for p in plans if p.get("id") != plan_id]
            if len(kept) == len(plans):
                return False
            store[user_id] = kept
            self._atomic_write(store)
        return True
