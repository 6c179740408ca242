"""Spending aggregation module."""
from collections import defaultdict
from typing import Iterable, Mapping, Union

from .models import SpendingRecord
from .request_builder import finite_amount
from financeflow.storage.models import Category, Expense
from financeflow.utils.logger import get_logger
from financeflow.utils.exceptions import DataIntegrityError

logger = get_logger()

OTHER_CATEGORY = "Other"


class SpendingAggregator:
    """Sums expenses per category name."""

    def aggregate(
        self,
        expenses: Iterable[Expense],
        categories: Union[Iterable[Category], Mapping[str, str]]
    ) -> SpendingRecord:
        """
        Aggregate expenses by category name.

        Args:
            expenses: Expense entries
            categories: Category objects, or a mapping of category id to name

        Returns:
            Mapping of category name to total amount spent. Expenses whose
            category cannot be resolved are counted under "Other".
        """
        if isinstance(categories, Mapping):
            names = dict(categories)
        else:
            names = {category.id: category.name for category in categories}

        totals = defaultdict(float)
        count = 0
        for expense in expenses:
            amount = finite_amount(expense.amount)
            if amount is None:
                raise DataIntegrityError(f"Expense {expense.id} has a non-finite amount: {expense.amount!r}")
            totals[names.get(expense.categoryId, OTHER_CATEGORY)] += amount
            count += 1

        logger.debug(f"Aggregated {count} expenses into {len(totals)} categories")
        return dict(totals)
