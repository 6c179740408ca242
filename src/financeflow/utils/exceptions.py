"""Custom exception classes for FinanceFlow."""
from typing import Any, Optional


class FinanceFlowError(Exception):
    """Base exception for FinanceFlow."""
    pass


class ConfigError(FinanceFlowError):
    """Configuration-related errors."""
    pass


class StorageError(FinanceFlowError):
    """Local store read/write errors."""
    pass


class ValidationError(FinanceFlowError):
    """Data validation errors."""
    pass


class DataIntegrityError(ValidationError):
    """Stored or supplied amounts that are not usable numbers."""
    pass


class LLMError(FinanceFlowError):
    """LLM processing errors."""
    pass


# Optimization failure kinds
class OptimizationError(FinanceFlowError):
    """Base class for the failures a budget optimization call can end in."""

    @property
    def kind(self) -> str:
        return type(self).__name__


class EmptySpending(OptimizationError, ValidationError):
    """No spending data was supplied."""
    pass


class EmptyGoals(OptimizationError, ValidationError):
    """Goal text is missing or blank."""
    pass


class InvocationFailed(OptimizationError, LLMError):
    """The language-model call itself failed."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class SchemaMismatch(OptimizationError, LLMError):
    """The model response does not have the expected shape."""

    def __init__(self, message: str, key: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.key = key
        self.value = value
