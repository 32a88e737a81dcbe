from typing import Final

DAYS_PER_MONTH: Final[int] = 30
MEAL_SLOTS: Final[tuple[str, ...]] = ("Breakfast", "Lunch", "Dinner")

# Placeholder calories per slot; the catalog carries prices only
SLOT_CALORIES: Final[dict[str, int]] = {"Breakfast": 400, "Lunch": 600, "Dinner": 500}
SLOT_INSTRUCTIONS: Final[dict[str, str]] = {
    "Breakfast": "Enjoy your delicious breakfast!",
    "Lunch": "A hearty lunch to keep you going.",
    "Dinner": "A nutritious dinner to end the day.",
}

# Day analysis bands
BASE_SCORE: Final[int] = 7
MIN_SCORE: Final[int] = 1
MAX_SCORE: Final[int] = 10
HEALTHY_CALORIES: Final[tuple[int, int]] = (1400, 2000)
ACCEPTABLE_CALORIES: Final[tuple[int, int]] = (1200, 2500)
GENERIC_SUMMARY: Final[str] = "A simple day of meals. Add meals to get a detailed analysis."

# Used when the catalog is empty so generation still yields a plan
FALLBACK_COMBINATION: Final[dict] = {
    "id": "staple",
    "breakfast": {"name": "Kita Firfir", "price": 25},
    "lunch": {"name": "Shiro Wat with Injera", "price": 45},
    "dinner": {"name": "Misir Wat with Injera", "price": 50},
    "total": 120,
}

SELECTION_PROMPT_TEMPLATE: Final[str] = (
    """
    You are a budget-conscious nutrition coach. Pick exactly ONE daily meal
    combination from the candidates below for this user.

    User profile:
    {profile}

    Recently served combination ids (avoid if possible): {recent}

    Candidates:
    {candidates}

    Reply with JSON only, in this format: {{"selectedId": <id of the chosen candidate>}}
    """
)
ANALYSIS_PROMPT_TEMPLATE: Final[str] = (
    """
    Rate the nutritional value of this daily meal plan on a scale from 1 to 10
    and explain the rating in one or two sentences.

    Meals:
    {meals}

    Total: {calories} kcal, {cost} ETB.

    Reply with JSON only, in this format: {{"score": <integer 1-10>, "summary": "<text>"}}
    """
)
