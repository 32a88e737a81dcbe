import logging
from typing import Optional
from fastapi import APIRouter, HTTPException, Query, Request, Response

from budgetmeal.domain.Plan import GeneratedPlan
from budgetmeal.domain.errors import ValidationError
from budgetmeal.infra.pdf_utils import generate_pdf_for_plan
from budgetmeal.logic.planning.generator import generate_plan
from budgetmeal.logic.reporting.analyzer import DayAnalyzer
from budgetmeal.logic.reporting.budget import monthly_spend_summary
from budgetmeal.logic.selection.selector import build_strategy
from budgetmeal.utilities.config import VARIETY_WINDOW
from budgetmeal.utilities.validators import NotesInput, ProfileInput

router = APIRouter(prefix="/api/users/{user_id}")
logger = logging.getLogger(__name__)


def _get_or_404(request: Request, user_id: str, plan_id: str) -> dict:
    doc = request.app.state.repository.get_plan(user_id, plan_id)
    if doc is None:
        raise HTTPException(status_code=404, detail="Plan not found")
    return doc


@router.post("/plans", status_code=201)
def create_plan(request: Request, user_id: str, profile: Optional[ProfileInput] = None):
    """Generate today's plan for the user and store it."""
    profile = profile or ProfileInput()
    state = request.app.state
    repo = state.repository
    try:
        recent = repo.recent_meal_ids(user_id, limit=VARIETY_WINDOW)
        plan = generate_plan(
            state.catalog,
            profile.to_profile(),
            recent_ids=recent,
            strategy=build_strategy(state.scoring_fn, state.rng),
        )
        return repo.add_plan(user_id, plan)
    except OSError as e:
        logger.exception("Storing generated plan failed")
        raise HTTPException(status_code=500, detail=f"Plan generation failed: {e}")


@router.get("/plans")
def list_plans(request: Request, user_id: str):
    plans = request.app.state.repository.list_plans(user_id)
    return {"count": len(plans), "plans": plans}


@router.get("/plans/{plan_id}")
def get_plan(request: Request, user_id: str, plan_id: str):
    return _get_or_404(request, user_id, plan_id)


@router.delete("/plans/{plan_id}", status_code=204)
def delete_plan(request: Request, user_id: str, plan_id: str):
    if not request.app.state.repository.delete_plan(user_id, plan_id):
        raise HTTPException(status_code=404, detail="Plan not found")
    logger.info(f"Deleted plan {plan_id} of user {user_id}")
    return Response(status_code=204)


@router.post("/plans/{plan_id}/analysis")
def analyze_plan(request: Request, user_id: str, plan_id: str):
    """Score the stored plan and attach the result to it."""
    doc = _get_or_404(request, user_id, plan_id)
    result = DayAnalyzer(request.app.state.scoring_fn).analyze(GeneratedPlan.from_dict(doc))
    request.app.state.repository.save_analysis(user_id, plan_id, result)
    return result.to_dict()


@router.delete("/plans/{plan_id}/meals/{index}")
def delete_meal(request: Request, user_id: str, plan_id: str, index: int):
    _get_or_404(request, user_id, plan_id)
    try:
        return request.app.state.repository.remove_meal(user_id, plan_id, index)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.put("/plans/{plan_id}/notes")
def update_notes(request: Request, user_id: str, plan_id: str, payload: NotesInput):
    _get_or_404(request, user_id, plan_id)
    return request.app.state.repository.save_notes(user_id, plan_id, payload.notes)


@router.delete("/plans/{plan_id}/notes")
def delete_notes(request: Request, user_id: str, plan_id: str):
    _get_or_404(request, user_id, plan_id)
    return request.app.state.repository.save_notes(user_id, plan_id, "")


@router.get("/plans/{plan_id}/pdf")
def plan_pdf(request: Request, user_id: str, plan_id: str):
    doc = _get_or_404(request, user_id, plan_id)
    pdf_bytes = generate_pdf_for_plan(doc)
    filename = f"meal_plan_{(doc.get('date') or '')[:10] or plan_id}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/budget")
def budget_summary(request: Request, user_id: str,
                   monthly_budget: Optional[float] = Query(default=None, ge=0)):
    """Month-to-date spend against the monthly budget."""
    plans = request.app.state.repository.list_plans(user_id)
    return monthly_spend_summary(plans, monthly_budget or 0.0)
