"""Dashboard and report aggregates over stored records."""
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List

from financeflow.storage.models import Budget, Category, Expense, Income

UNCATEGORIZED = "Uncategorized"
OVERALL = "Overall"


@dataclass
class FinancialSummary:
    total_income: float
    total_expenses: float
    net_balance: float


@dataclass
class CategoryTotal:
    name: str
    value: float


@dataclass
class BudgetStatus:
    name: str
    budgeted: float
    spent: float
    remaining: float


@dataclass
class BudgetProgress:
    total_spent: float
    progress: float  # percent of the budget used
    is_over_budget: bool


@dataclass
class MonthlyTotal:
    name: str  # e.g. "Oct 2026"
    value: float


def _category_names(categories: Iterable[Category]) -> Dict[str, str]:
    return {category.id: category.name for category in categories}


def financial_summary(expenses: Iterable[Expense], incomes: Iterable[Income]) -> FinancialSummary:
    """Total income, total expenses and the balance between them."""
    total_expenses = sum(expense.amount for expense in expenses)
    total_income = sum(income.amount for income in incomes)
    return FinancialSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        net_balance=total_income - total_expenses
    )


def expenses_by_category(expenses: Iterable[Expense], categories: Iterable[Category]) -> List[CategoryTotal]:
    """Spending per category name, in the order categories are first seen."""
    names = _category_names(categories)
    totals: Dict[str, float] = defaultdict(float)
    for expense in expenses:
        totals[names.get(expense.categoryId, UNCATEGORIZED)] += expense.amount
    return [CategoryTotal(name, value) for name, value in totals.items()]


def budget_status(budgets: Iterable[Budget], expenses: Iterable[Expense],
                  categories: Iterable[Category]) -> List[BudgetStatus]:
    """Budgeted vs. spent for every budget, counting all expenses in its category."""
    names = _category_names(categories)
    expenses = list(expenses)
    statuses = []
    for budget in budgets:
        spent = sum(expense.amount for expense in expenses if expense.categoryId == budget.categoryId)
        statuses.append(BudgetStatus(
            name=names.get(budget.categoryId, OVERALL),
            budgeted=budget.amount,
            spent=spent,
            remaining=budget.amount - spent
        ))
    return statuses


def budget_progress(budget: Budget, expenses: Iterable[Expense]) -> BudgetProgress:
    """Spending against a budget since its start date."""
    start = date.fromisoformat(budget.startDate) if budget.startDate else date.min
    total_spent = sum(
        expense.amount for expense in expenses
        if expense.categoryId == budget.categoryId and date.fromisoformat(expense.date) >= start
    )

    if budget.amount > 0:
        progress = total_spent / budget.amount * 100
    else:
        progress = 100.0 if total_spent > 0 else 0.0

    return BudgetProgress(
        total_spent=total_spent,
        progress=progress,
        is_over_budget=total_spent > budget.amount
    )


def monthly_spending(expenses: Iterable[Expense]) -> List[MonthlyTotal]:
    """Spending per calendar month, oldest first."""
    totals: Dict[date, float] = defaultdict(float)
    for expense in expenses:
        month = date.fromisoformat(expense.date).replace(day=1)
        totals[month] += expense.amount
    return [MonthlyTotal(month.strftime("%b %Y"), totals[month]) for month in sorted(totals)]


def format_currency(amount: float, symbol: str = "$") -> str:
    """Format an amount like 1234.5 as $1,234.50."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
