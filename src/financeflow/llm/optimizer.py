"""Budget optimization pipeline: build, render, invoke, validate."""
from typing import Iterable, Mapping, Optional

from .aggregator import SpendingAggregator
from .invoker import GeminiModelInvoker
from .models import (
    BudgetAllocation,
    OptimizationOutcome,
    OptimizationResult,
    OptimizationState,
    OptimizeBudgetInput,
)
from .prompt import render_prompt
from .request_builder import build_request
from .validator import validate_response
from financeflow.storage.models import Category, Expense
from financeflow.utils.logger import get_logger
from financeflow.utils.exceptions import OptimizationError

logger = get_logger()

OUTPUT_SCHEMA = BudgetAllocation.model_json_schema()


class BudgetOptimizer:
    """Runs one optimization call per request.

    Holds no per-call state, so a single instance can serve concurrent
    callers. Every failure ends the call; callers re-run to retry.
    """

    def __init__(self, invoker: GeminiModelInvoker, aggregator: Optional[SpendingAggregator] = None):
        self.invoker = invoker
        self.aggregator = aggregator or SpendingAggregator()

    def optimize(self, spending: Mapping[str, float], goals: str) -> OptimizationOutcome:
        """
        Suggest a budget allocation for the given spending and goals.

        Args:
            spending: Category name to amount spent
            goals: Free-text financial goals

        Returns:
            OptimizationOutcome in state SUCCEEDED (with result) or FAILED
            (with one of EmptySpending, EmptyGoals, InvocationFailed,
            SchemaMismatch)
        """
        state = OptimizationState.IDLE
        try:
            state = self._advance(state, OptimizationState.BUILDING)
            prompt = render_prompt(build_request(spending, goals))

            state = self._advance(state, OptimizationState.INVOKING)
            raw = self.invoker.invoke(prompt, OUTPUT_SCHEMA)

            state = self._advance(state, OptimizationState.VALIDATING)
            result = validate_response(raw)
        except OptimizationError as e:
            return self._failed(state, e)

        return self._succeeded(state, result)

    async def optimize_async(self, spending: Mapping[str, float], goals: str) -> OptimizationOutcome:
        """Same as optimize, awaiting the model call instead of blocking."""
        state = OptimizationState.IDLE
        try:
            state = self._advance(state, OptimizationState.BUILDING)
            prompt = render_prompt(build_request(spending, goals))

            state = self._advance(state, OptimizationState.INVOKING)
            raw = await self.invoker.ainvoke(prompt, OUTPUT_SCHEMA)

            state = self._advance(state, OptimizationState.VALIDATING)
            result = validate_response(raw)
        except OptimizationError as e:
            return self._failed(state, e)

        return self._succeeded(state, result)

    def optimize_expenses(self, expenses: Iterable[Expense], categories: Iterable[Category],
                          goals: str) -> OptimizationOutcome:
        """Aggregate tracked expenses, then optimize."""
        spending = self.aggregator.aggregate(expenses, categories)
        return self.optimize(spending, goals)

    def optimize_input(self, payload: OptimizeBudgetInput) -> OptimizationOutcome:
        """Optimize an external input payload."""
        return self.optimize(payload.past_spending, payload.financial_goals)

    @staticmethod
    def _advance(current: OptimizationState, target: OptimizationState) -> OptimizationState:
        logger.debug(f"Budget optimization: {current.value} -> {target.value}")
        return target

    def _failed(self, state: OptimizationState, error: OptimizationError) -> OptimizationOutcome:
        self._advance(state, OptimizationState.FAILED)
        return OptimizationOutcome(state=OptimizationState.FAILED, error=error)

    def _succeeded(self, state: OptimizationState, result: OptimizationResult) -> OptimizationOutcome:
        self._advance(state, OptimizationState.SUCCEEDED)
        return OptimizationOutcome(state=OptimizationState.SUCCEEDED, result=result)
