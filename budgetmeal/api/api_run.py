import random
import logging
from typing import Callable, Optional

from fastapi import FastAPI

from budgetmeal.api.routes import catalog as catalog_routes
from budgetmeal.api.routes import plans as plan_routes
from budgetmeal.domain.Catalog import Catalog
from budgetmeal.infra.Catalog_Repository import reading_from_catalog
from budgetmeal.infra.Plan_Repository import PlanRepository

# Logging
logger = logging.getLogger("budgetmeal_app")


def create_app(catalog: Optional[Catalog] = None,
               repository: Optional[PlanRepository] = None,
               scoring_fn: Optional[Callable[[str], str]] = None,
               rng: Optional[random.Random] = None) -> FastAPI:
    """Build the API with its collaborators passed in explicitly.

    `scoring_fn` is the optional text-generation callable; without it plan
    selection and day analysis use their local strategies.
    """
    app = FastAPI(title="Budget Meal Planner API")
    app.state.catalog = catalog if catalog is not None else reading_from_catalog()
    app.state.repository = repository or PlanRepository()
    app.state.scoring_fn = scoring_fn
    app.state.rng = rng

    app.include_router(catalog_routes.router)
    app.include_router(plan_routes.router)

    @app.get("/api/health")
    def health():
        return {
            "status": "ok",
            "catalog_size": len(app.state.catalog),
            "delegated_scoring": app.state.scoring_fn is not None,
        }

    logger.info("App ready: %s, delegated scoring %s",
                app.state.catalog, "on" if scoring_fn else "off")
    return app
