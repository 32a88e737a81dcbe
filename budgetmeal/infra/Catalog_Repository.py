import json
import logging
from pathlib import Path
from typing import Optional

from budgetmeal.domain.Catalog import Catalog
from budgetmeal.infra.paths import CATALOG_FILE

logger = logging.getLogger(__name__)


def reading_from_catalog(path: Optional[Path] = None) -> Catalog:
    """Read the meal catalog from JSON.

    A missing or unreadable file gives an empty catalog (generation then uses
    the staple combination). DataIntegrityError from bad entries propagates.
    """
    catalog_path = Path(path or CATALOG_FILE)
    try:
        with open(catalog_path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except FileNotFoundError:
        logger.warning(f"Catalog file not found: {catalog_path}. Using an empty catalog.")
        return Catalog()
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in catalog file: {e}")
        return Catalog()
    catalog = Catalog.load(raw if isinstance(raw, list) else raw.get("meals", []))
    logger.info(f"Loaded {catalog}")
    return catalog
