"""Tests for spending aggregator."""
import unittest

from financeflow.llm.aggregator import SpendingAggregator
from financeflow.storage.models import Category, Expense
from financeflow.utils.exceptions import DataIntegrityError


class TestSpendingAggregator(unittest.TestCase):
    """Test SpendingAggregator functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.aggregator = SpendingAggregator()
        self.categories = [Category(id="food", name="Food")]

    def test_aggregate_with_unknown_category(self):
        """Unresolved categories are counted under Other."""
        expenses = [
            Expense("1", 50, "food", "2026-10-01"),
            Expense("2", 30, "food", "2026-10-02"),
            Expense("3", 20, "unknown", "2026-10-03"),
        ]

        result = self.aggregator.aggregate(expenses, self.categories)

        self.assertEqual(result, {"Food": 80, "Other": 20})

    def test_fractional_amounts(self):
        expenses = [
            Expense("1", 10.25, "food", "2026-10-01"),
            Expense("2", 4.5, "food", "2026-10-01"),
        ]

        result = self.aggregator.aggregate(expenses, self.categories)
        self.assertAlmostEqual(result["Food"], 14.75)

    def test_category_mapping_lookup(self):
        """A plain id -> name mapping works as the category lookup."""
        expenses = [Expense("1", 12, "rent", "2026-10-01")]

        result = self.aggregator.aggregate(expenses, {"rent": "Rent"})
        self.assertEqual(result, {"Rent": 12})

    def test_empty_expenses(self):
        self.assertEqual(self.aggregator.aggregate([], self.categories), {})

    def test_non_finite_amount_raises_error(self):
        expenses = [Expense("1", float("nan"), "food", "2026-10-01")]

        with self.assertRaises(DataIntegrityError):
            self.aggregator.aggregate(expenses, self.categories)

    def test_amount_too_large_for_float_raises_error(self):
        expenses = [Expense("1", 10 ** 400, "food", "2026-10-01")]

        with self.assertRaises(DataIntegrityError):
            self.aggregator.aggregate(expenses, self.categories)

    def test_non_numeric_amount_raises_error(self):
        expenses = [Expense("1", "50", "food", "2026-10-01")]

        with self.assertRaises(DataIntegrityError):
            self.aggregator.aggregate(expenses, self.categories)


if __name__ == "__main__":
    unittest.main()
