"""
Core data models for the exterminator validation library.

All models use Pydantic for runtime validation and type safety.
"""

from .rule import Rule, RuleOutcome, RuleStatus
from .validation_result import FieldResult, ValidationReport

__all__ = [
    "Rule",
    "RuleOutcome",
    "RuleStatus",
    "FieldResult",
    "ValidationReport",
]
