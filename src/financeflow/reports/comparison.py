"""Side-by-side view of current spending and a suggested allocation."""
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

import Levenshtein

from financeflow.utils.logger import get_logger

logger = get_logger()


@dataclass
class AllocationRow:
    category: str
    spent: Optional[float]
    suggested: Optional[float]

    @property
    def change(self) -> Optional[float]:
        if self.spent is None or self.suggested is None:
            return None
        return self.suggested - self.spent


def _normalize_category(name: str) -> str:
    """Normalize category name for matching."""
    return name.strip().lower()


def match_category(name: str, candidates: List[str], fuzzy_threshold: int = 2) -> Optional[str]:
    """
    Find the candidate a category name refers to.

    Args:
        name: Category name to look up
        candidates: Known category names
        fuzzy_threshold: Maximum Levenshtein distance for fuzzy match

    Returns:
        Matching candidate or None
    """
    normalized = _normalize_category(name)

    # Try exact match
    for candidate in candidates:
        if _normalize_category(candidate) == normalized:
            return candidate

    # Try fuzzy match, closest first; short names need a proportionally closer match
    limit = min(fuzzy_threshold, (len(normalized) - 1) // 2)
    best, best_distance = None, limit + 1
    for candidate in candidates:
        distance = Levenshtein.distance(normalized, _normalize_category(candidate))
        if distance < best_distance:
            best, best_distance = candidate, distance

    if best is not None:
        logger.debug(f"Fuzzy category match: {name} -> {best} (distance: {best_distance})")
    return best


def compare_allocation(spending: Mapping[str, float], suggestion: Mapping[str, float],
                       fuzzy_threshold: int = 2) -> List[AllocationRow]:
    """
    Pair each spending category with its suggested amount.

    Rows follow the spending order; suggested categories with no spending
    counterpart are appended with spent=None.
    """
    rows: Dict[str, AllocationRow] = {
        category: AllocationRow(category, amount, None) for category, amount in spending.items()
    }
    extra: List[AllocationRow] = []

    for category, amount in suggestion.items():
        unmatched = [name for name, row in rows.items() if row.suggested is None]
        matched = match_category(category, unmatched, fuzzy_threshold)
        if matched is None:
            extra.append(AllocationRow(category, None, amount))
        else:
            rows[matched].suggested = amount

    return list(rows.values()) + extra
