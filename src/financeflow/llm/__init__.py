"""LLM budget optimization module."""
from .models import (
    BudgetAllocation,
    OptimizationOutcome,
    OptimizationRequest,
    OptimizationState,
    OptimizeBudgetInput,
)
from .aggregator import SpendingAggregator
from .request_builder import build_request, parse_manual_spending
from .prompt import render_prompt
from .validator import validate_response
from .invoker import GeminiModelInvoker
from .optimizer import BudgetOptimizer

__all__ = [
    "BudgetAllocation",
    "OptimizationOutcome",
    "OptimizationRequest",
    "OptimizationState",
    "OptimizeBudgetInput",
    "SpendingAggregator",
    "build_request",
    "parse_manual_spending",
    "render_prompt",
    "validate_response",
    "GeminiModelInvoker",
    "BudgetOptimizer",
]
