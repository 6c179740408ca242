"""JSON-file store for expenses, incomes, budgets and categories."""
import json
import uuid
from dataclasses import asdict, replace
from datetime import date
from pathlib import Path
from typing import List, Optional, Type, TypeVar

from .models import Budget, Category, Expense, Income
from financeflow.utils.logger import get_data_dir, get_logger
from financeflow.utils.exceptions import StorageError, ValidationError

logger = get_logger()

DEFAULT_CATEGORIES_PATH = Path(__file__).parent.parent / "resources" / "categories.json"
BUDGET_PERIODS = ("monthly", "yearly")

T = TypeVar("T")


class LocalStore:
    """Keeps one JSON list per key, like browser local storage."""

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Initialize local store.

        Args:
            data_dir: Directory for the JSON files (defaults to the FinanceFlow data directory)
        """
        self.data_dir = Path(data_dir) if data_dir else get_data_dir()
        self.data_dir.mkdir(parents=True, exist_ok=True)

    # Categories

    def list_categories(self) -> List[Category]:
        """Stored categories, or the default set when none are stored."""
        if not self._key_file("categories").exists():
            return self._load_default_categories()
        return self._load_items("categories", Category)

    # Expenses

    def list_expenses(self) -> List[Expense]:
        return self._load_items("expenses", Expense)

    def add_expense(self, amount: float, category_id: str, expense_date: Optional[str] = None,
                    description: str = "") -> Expense:
        """
        Add an expense.

        Args:
            amount: Amount spent
            category_id: Category identifier
            expense_date: ISO date, defaults to today
            description: Free-text note

        Returns:
            The stored Expense
        """
        expense_date = expense_date or date.today().isoformat()
        self._require_fields(amount, category_id, expense_date)

        expense = Expense(
            id=str(uuid.uuid4()),
            amount=float(amount),
            categoryId=category_id,
            date=expense_date,
            description=description
        )
        expenses = self.list_expenses()
        expenses.append(expense)
        self._save_items("expenses", expenses)
        logger.info(f"Added expense {expense.id} ({expense.amount} in {category_id})")
        return expense

    def update_expense(self, expense_id: str, **changes) -> Expense:
        """Update fields of an existing expense."""
        return self._update_item("expenses", Expense, expense_id, changes)

    def delete_expense(self, expense_id: str) -> None:
        self._delete_item("expenses", Expense, expense_id)

    # Incomes

    def list_incomes(self) -> List[Income]:
        return self._load_items("incomes", Income)

    def add_income(self, amount: float, source: str, income_date: Optional[str] = None,
                   description: str = "") -> Income:
        """Add an income entry."""
        income_date = income_date or date.today().isoformat()
        self._require_fields(amount, source, income_date)

        income = Income(
            id=str(uuid.uuid4()),
            amount=float(amount),
            source=source,
            date=income_date,
            description=description
        )
        incomes = self.list_incomes()
        incomes.append(income)
        self._save_items("incomes", incomes)
        logger.info(f"Added income {income.id} ({income.amount} from {source})")
        return income

    def delete_income(self, income_id: str) -> None:
        self._delete_item("incomes", Income, income_id)

    # Budgets

    def list_budgets(self) -> List[Budget]:
        return self._load_items("budgets", Budget)

    def add_budget(self, amount: float, category_id: str, period: str = "monthly",
                   start_date: Optional[str] = None) -> Budget:
        """Add a budget for a category."""
        start_date = start_date or date.today().isoformat()
        self._require_fields(amount, category_id, start_date)
        if period not in BUDGET_PERIODS:
            raise ValidationError(f"Budget period must be one of {BUDGET_PERIODS}, got '{period}'")

        budget = Budget(
            id=str(uuid.uuid4()),
            amount=float(amount),
            categoryId=category_id,
            period=period,
            startDate=start_date
        )
        budgets = self.list_budgets()
        budgets.append(budget)
        self._save_items("budgets", budgets)
        logger.info(f"Added {period} budget {budget.id} ({budget.amount} for {category_id})")
        return budget

    def update_budget(self, budget_id: str, **changes) -> Budget:
        """Update fields of an existing budget."""
        if "period" in changes and changes["period"] not in BUDGET_PERIODS:
            raise ValidationError(f"Budget period must be one of {BUDGET_PERIODS}, got '{changes['period']}'")
        return self._update_item("budgets", Budget, budget_id, changes)

    def delete_budget(self, budget_id: str) -> None:
        self._delete_item("budgets", Budget, budget_id)

    # Helpers

    @staticmethod
    def _require_fields(amount, key: str, when: str) -> None:
        """Amount, category/source and date are required for every entry."""
        if amount is None or amount == "" or not key or not when:
            raise ValidationError("Please fill in all required fields.")
        try:
            float(amount)
        except (TypeError, ValueError):
            raise ValidationError(f"Amount must be a number, got '{amount}'")
        try:
            date.fromisoformat(when)
        except ValueError:
            raise ValidationError(f"Date must be YYYY-MM-DD, got '{when}'")

    def _update_item(self, key: str, model: Type[T], item_id: str, changes: dict) -> T:
        items = self._load_items(key, model)
        for index, item in enumerate(items):
            if item.id == item_id:
                changes = {k: v for k, v in changes.items() if v is not None}
                if "amount" in changes:
                    changes["amount"] = float(changes["amount"])
                updated = replace(item, **changes)
                items[index] = updated
                self._save_items(key, items)
                logger.info(f"Updated {key[:-1]} {item_id}")
                return updated
        raise StorageError(f"No {key[:-1]} with id {item_id}")

    def _delete_item(self, key: str, model: Type[T], item_id: str) -> None:
        items = self._load_items(key, model)
        remaining = [item for item in items if item.id != item_id]
        if len(remaining) == len(items):
            raise StorageError(f"No {key[:-1]} with id {item_id}")
        self._save_items(key, remaining)
        logger.info(f"Deleted {key[:-1]} {item_id}")

    def _key_file(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def _load_items(self, key: str, model: Type[T]) -> List[T]:
        """Load a list from its JSON file."""
        path = self._key_file(key)
        if not path.exists():
            return []

        try:
            with open(path, "r", encoding="utf-8") as f:
                return [model(**item) for item in json.load(f)]
        except (OSError, ValueError, TypeError) as e:
            raise StorageError(f"Failed to load {key} from {path}: {e}") from e

    def _save_items(self, key: str, items: list) -> None:
        """Save a list to its JSON file."""
        path = self._key_file(key)
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump([asdict(item) for item in items], f, ensure_ascii=False, indent=2)
        except OSError as e:
            raise StorageError(f"Failed to save {key} to {path}: {e}") from e

    @staticmethod
    def _load_default_categories() -> List[Category]:
        with open(DEFAULT_CATEGORIES_PATH, "r", encoding="utf-8") as f:
            return [Category(**item) for item in json.load(f)]
