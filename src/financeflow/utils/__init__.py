"""Utility modules."""
from .logger import get_logger, get_data_dir, set_operation_context, configure_logging
from .exceptions import (
    FinanceFlowError,
    ConfigError,
    StorageError,
    ValidationError,
    DataIntegrityError,
    LLMError,
    OptimizationError,
    EmptySpending,
    EmptyGoals,
    InvocationFailed,
    SchemaMismatch
)

__all__ = [
    "get_logger",
    "get_data_dir",
    "set_operation_context",
    "configure_logging",
    "FinanceFlowError",
    "ConfigError",
    "StorageError",
    "ValidationError",
    "DataIntegrityError",
    "LLMError",
    "OptimizationError",
    "EmptySpending",
    "EmptyGoals",
    "InvocationFailed",
    "SchemaMismatch"
]
