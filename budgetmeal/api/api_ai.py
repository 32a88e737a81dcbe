import logging
from typing import Callable, Optional
from openai import OpenAI

from budgetmeal.utilities.config import OPENAI_API_KEY, OPENAI_MODEL, OPENAI_TIMEOUT

logger = logging.getLogger(__name__)


# === Helper: Get OpenAI Client ===
def _get_openai_client(api_key: Optional[str] = None):
    """Return an OpenAI client if an API key is configured, otherwise None."""
    key = api_key if api_key is not None else OPENAI_API_KEY
    if not key:
        return None
    return OpenAI(api_key=key, timeout=OPENAI_TIMEOUT, max_retries=0)


# === Scoring callable ===
def make_scoring_fn(api_key: Optional[str] = None, model: str = OPENAI_MODEL,
                    client=None) -> Optional[Callable[[str], str]]:
    """Build the text-generation callable used for delegated selection and analysis.

    Returns None when no key is configured, which makes callers use their
    local strategies. The callable makes a single attempt (no retries) and
    lets any client error propagate; selector and analyzer catch it.
    """
    client = client or _get_openai_client(api_key)
    if client is None:
        logger.warning("OPENAI_API_KEY not set; meal selection and analysis run locally.")
        return None

    def scoring_fn(prompt: str) -> str:
        response = client.responses.create(model=model, input=prompt)
        return (response.output_text or "").strip()

    return scoring_fn
