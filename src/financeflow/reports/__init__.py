"""Reporting module."""
from .dashboard import (
    FinancialSummary,
    CategoryTotal,
    BudgetStatus,
    BudgetProgress,
    MonthlyTotal,
    financial_summary,
    expenses_by_category,
    budget_status,
    budget_progress,
    monthly_spending,
    format_currency,
)
from .comparison import AllocationRow, match_category, compare_allocation

__all__ = [
    "FinancialSummary",
    "CategoryTotal",
    "BudgetStatus",
    "BudgetProgress",
    "MonthlyTotal",
    "financial_summary",
    "expenses_by_category",
    "budget_status",
    "budget_progress",
    "monthly_spending",
    "format_currency",
    "AllocationRow",
    "match_category",
    "compare_allocation",
]
