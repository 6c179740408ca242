"""Validation of model responses against the budget allocation schema."""
import json
import re
from typing import Any

from pydantic import ValidationError

from .models import BudgetAllocation, OptimizationResult
from financeflow.utils.exceptions import SchemaMismatch


def _decode(text: str) -> Any:
    """Decode JSON text, tolerating a surrounding markdown code block."""
    clean_text = text.strip()

    # Strip markdown code blocks (```json ... ```)
    if clean_text.startswith("```"):
        clean_text = re.sub(r"^```(json)?", "", clean_text).strip()
    if clean_text.endswith("```"):
        clean_text = clean_text[:-3].strip()

    try:
        return json.loads(clean_text)
    except json.JSONDecodeError as e:
        raise SchemaMismatch(f"Model response is not valid JSON: {e}", value=text[:200])


def validate_response(raw: Any) -> OptimizationResult:
    """
    Check a model response and return it as a budget allocation.

    Args:
        raw: Response text, or an already decoded object

    Returns:
        Mapping of category name to suggested amount

    Raises:
        SchemaMismatch: the response is not an object of category names to
            finite, non-negative numbers
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    data = _decode(raw) if isinstance(raw, str) else raw

    try:
        allocation = BudgetAllocation.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        loc = error.get("loc") or ()
        key = str(loc[0]) if loc else None
        value = error.get("input")
        where = f" at '{key}'" if key is not None else ""
        raise SchemaMismatch(
            f"Model response does not match the budget allocation schema{where}: {error['msg']} (got {value!r})",
            key=key,
            value=value
        )

    return dict(allocation.root)
