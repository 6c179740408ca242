"""Data models for locally stored finance records."""
from dataclasses import dataclass


@dataclass
class Category:
    """Spending category."""
    id: str
    name: str
    icon: str = "package"
    color: str = "#8884D8"


@dataclass
class Expense:
    """Expense entry."""
    id: str
    amount: float
    categoryId: str
    date: str  # YYYY-MM-DD
    description: str = ""


@dataclass
class Income:
    """Income entry."""
    id: str
    amount: float
    source: str
    date: str  # YYYY-MM-DD
    description: str = ""


@dataclass
class Budget:
    """Per-category budget."""
    id: str
    amount: float
    categoryId: str
    period: str = "monthly"  # monthly | yearly
    startDate: str = ""
