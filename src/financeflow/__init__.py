"""FinanceFlow: personal finance tracking with AI budget suggestions."""

__version__ = "0.1.0"
