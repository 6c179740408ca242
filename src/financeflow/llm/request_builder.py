"""Optimization request construction and manual spending input."""
import json
import math
from typing import Mapping, Optional

from .models import OptimizationRequest, SpendingRecord
from financeflow.utils.exceptions import DataIntegrityError, EmptyGoals, EmptySpending, ValidationError

MANUAL_FORMAT_HINT = 'Use JSON like: {"Groceries": 200, "Rent": 1000}'


def _is_number(value) -> bool:
    return not isinstance(value, bool) and isinstance(value, (int, float))


def finite_amount(value) -> Optional[float]:
    """The value as a finite float, or None when it is not a usable amount."""
    if not _is_number(value):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def build_request(spending: Mapping[str, float], goals: str) -> OptimizationRequest:
    """
    Validate spending and goal text before any model call.

    Raises:
        EmptySpending: spending has no entries
        EmptyGoals: goals is empty after trimming
        DataIntegrityError: an entry has an empty name or a negative/non-finite amount
    """
    if not spending:
        raise EmptySpending(
            "No spending data available. Please add some expenses or provide past spending manually."
        )

    normalized_goals = (goals or "").strip()
    if not normalized_goals:
        raise EmptyGoals("Please describe your financial goals.")

    for category, amount in spending.items():
        if not isinstance(category, str) or not category.strip():
            raise DataIntegrityError(f"Spending category names must be non-empty strings, got {category!r}")
        value = finite_amount(amount)
        if value is None or value < 0:
            raise DataIntegrityError(
                f"Spending for '{category}' must be a non-negative number, got {amount!r}"
            )

    return OptimizationRequest(spending=dict(spending), goals=normalized_goals)


def parse_manual_spending(text: str) -> SpendingRecord:
    """Parse spending typed by the user as a JSON object of category to amount."""
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Error parsing manual spending: Invalid JSON format ({e}). {MANUAL_FORMAT_HINT}")

    if not isinstance(parsed, dict):
        raise ValidationError(f"Error parsing manual spending: Invalid JSON format. {MANUAL_FORMAT_HINT}")

    if not all(_is_number(value) for value in parsed.values()):
        raise ValidationError(
            f"Error parsing manual spending: Invalid format. Must be {{ 'Category': amount }}. {MANUAL_FORMAT_HINT}"
        )

    return parsed
