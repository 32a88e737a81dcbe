from budgetmeal.utilities.config import DATA_DIR as _DATA_DIR

# Centralized paths for data files (single source of truth)
DATA_DIR = _DATA_DIR.resolve()
CATALOG_FILE = DATA_DIR / 'meals.json'
PLANS_FILE = DATA_DIR / 'meal_plans.json'

__all__ = ['DATA_DIR', 'CATALOG_FILE', 'PLANS_FILE']
