"""Tests for the local JSON store."""
import unittest
import tempfile
import shutil
from pathlib import Path

from financeflow.storage.local_store import LocalStore
from financeflow.utils.exceptions import StorageError, ValidationError


class TestLocalStore(unittest.TestCase):
    """Test LocalStore functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())
        self.store = LocalStore(self.test_dir)

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_default_categories(self):
        categories = self.store.list_categories()
        ids = [category.id for category in categories]

        self.assertIn("food", ids)
        self.assertIn("other", ids)

    def test_add_and_list_expense(self):
        expense = self.store.add_expense(42.5, "food", "2026-10-01", "Lunch")

        expenses = LocalStore(self.test_dir).list_expenses()
        self.assertEqual(len(expenses), 1)
        self.assertEqual(expenses[0], expense)
        self.assertEqual(expenses[0].amount, 42.5)
        self.assertTrue((self.test_dir / "expenses.json").exists())

    def test_add_expense_defaults_date(self):
        expense = self.store.add_expense(10, "food")
        self.assertTrue(expense.date)

    def test_required_fields(self):
        with self.assertRaises(ValidationError):
            self.store.add_expense(None, "food", "2026-10-01")
        with self.assertRaises(ValidationError):
            self.store.add_expense(10, "", "2026-10-01")
        with self.assertRaises(ValidationError):
            self.store.add_expense(10, "food", "01/10/2026")

    def test_update_expense(self):
        expense = self.store.add_expense(10, "food", "2026-10-01")

        updated = self.store.update_expense(expense.id, amount=25, description=None)

        self.assertEqual(updated.amount, 25.0)
        self.assertEqual(self.store.list_expenses()[0].amount, 25.0)

    def test_update_missing_expense(self):
        with self.assertRaises(StorageError):
            self.store.update_expense("missing", amount=1)

    def test_delete_expense(self):
        keep = self.store.add_expense(10, "food", "2026-10-01")
        drop = self.store.add_expense(20, "food", "2026-10-02")

        self.store.delete_expense(drop.id)

        self.assertEqual([e.id for e in self.store.list_expenses()], [keep.id])
        with self.assertRaises(StorageError):
            self.store.delete_expense(drop.id)

    def test_incomes(self):
        income = self.store.add_income(3000, "Salary", "2026-10-01")
        self.assertEqual(self.store.list_incomes(), [income])

        self.store.delete_income(income.id)
        self.assertEqual(self.store.list_incomes(), [])

    def test_budgets(self):
        budget = self.store.add_budget(500, "food", "monthly", "2026-10-01")
        self.assertEqual(self.store.list_budgets(), [budget])

        updated = self.store.update_budget(budget.id, period="yearly")
        self.assertEqual(updated.period, "yearly")

        with self.assertRaises(ValidationError):
            self.store.add_budget(500, "food", "weekly", "2026-10-01")

    def test_corrupt_file(self):
        (self.test_dir / "expenses.json").write_text("not json", encoding="utf-8")

        with self.assertRaises(StorageError):
            self.store.list_expenses()


if __name__ == "__main__":
    unittest.main()
