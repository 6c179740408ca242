"""Data models and schemas for budget optimization."""
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel

from financeflow.utils.exceptions import OptimizationError

SpendingRecord = Dict[str, float]  # category name -> amount spent
OptimizationResult = Dict[str, float]  # category name -> suggested allocation

Amount = Annotated[float, Field(strict=True, ge=0, allow_inf_nan=False)]


@dataclass(frozen=True)
class OptimizationRequest:
    """Validated spending and goal text for a single optimization call."""
    spending: SpendingRecord
    goals: str


class OptimizationState(str, Enum):
    """Stages of a single optimization call."""
    IDLE = "idle"
    BUILDING = "building"
    INVOKING = "invoking"
    VALIDATING = "validating"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class OptimizationOutcome:
    """Terminal result of an optimization call."""
    state: OptimizationState
    result: Optional[OptimizationResult] = None
    error: Optional[OptimizationError] = None

    @property
    def succeeded(self) -> bool:
        return self.state is OptimizationState.SUCCEEDED


class OptimizeBudgetInput(BaseModel):
    """External input payload."""
    model_config = ConfigDict(populate_by_name=True)

    past_spending: Dict[str, Amount] = Field(
        alias="pastSpending",
        description="A record of past spending, with keys as spending categories and values as amounts spent."
    )
    financial_goals: str = Field(
        alias="financialGoals",
        description="A description of the user's financial goals."
    )


class BudgetAllocation(RootModel[Dict[str, Amount]]):
    """Suggested budget allocations for each category, keyed by category name."""
    pass
