"""Defensive parsing of JSON replies from the text-generation service.

Models often wrap JSON in markdown fences, add trailing commas or surround it
with prose. These helpers recover the first JSON object when possible.
"""
import re
import json
from json import JSONDecodeError
from typing import Any, Dict, Optional

from budgetmeal.domain.errors import ExternalServiceFailure


def _strip_code_fences(text: str) -> str:
    """Remove common markdown code fences and leading/trailing whitespace."""
    text = re.sub(r"```(?:json)?\s*\n(.*?)```", r"\1", text, flags=re.S)
    text = re.sub(r"^```|```$", "", text.strip())
    return text.strip()


def _remove_trailing_commas(text: str) -> str:
    """Remove trailing commas before a closing brace/bracket."""
    return re.sub(r",\s*(\}|\])", r"\1", text)


def _extract_json_by_balancing(text: str) -> Optional[str]:
    """Extract the first JSON object/array by balancing braces/brackets."""
    start = None
    stack = []
    in_string = False
    escape = False

    for i, ch in enumerate(text):
        if escape:
            escape = False
            continue
        if in_string:
            if ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in "{[":
            if start is None:
                start = i
            stack.append(ch)
        elif ch in "}]":
            if not stack:
                continue
            opening = stack.pop()
            if (opening == "{" and ch != "}") or (opening == "[" and ch != "]"):
                return None
            if not stack and start is not None:
                return text[start:i + 1]
    return None


def parse_json_object(reply: Any) -> Dict[str, Any]:
    """Return the JSON object contained in `reply` or raise ExternalServiceFailure."""
    if not isinstance(reply, str) or not reply.strip():
        raise ExternalServiceFailure("Empty reply from text-generation service")
    text = _remove_trailing_commas(_strip_code_fences(reply))
    try:
        parsed = json.loads(text)
    except JSONDecodeError:
        candidate = _extract_json_by_balancing(text)
        if candidate is None:
            raise ExternalServiceFailure(f"Reply is not JSON: {reply[:200]!r}")
        try:
            parsed = json.loads(_remove_trailing_commas(candidate))
        except JSONDecodeError as e:
            raise ExternalServiceFailure(f"Reply is not JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise ExternalServiceFailure(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


__all__ = ["parse_json_object"]
