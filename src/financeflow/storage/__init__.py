"""Local storage module."""
from .models import Category, Expense, Income, Budget
from .local_store import LocalStore

__all__ = ["Category", "Expense", "Income", "Budget", "LocalStore"]
