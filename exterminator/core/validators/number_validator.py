"""
NumberValidator - fluent rule builder for numeric fields.
"""

import math
import operator
from collections.abc import Callable
from typing import Any

from exterminator.core.models import Rule
from exterminator.core.models.rule import RuleMessage

from .base_validator import BaseValidator


def is_number(value: Any) -> bool:
    """True for int/float values, excluding bool and NaN."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def _numeric_only(predicate: Callable[[Any], bool]) -> Callable[[Any, Any], bool]:
    def check(value: Any, record: Any) -> bool:
        return is_number(value) and bool(predicate(value))

    return check


def _compare_field(field: str, compare: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    """Cross-field comparison against another numeric field of the record."""

    def check(value: Any, record: Any) -> bool:
        other = record.get(field)
        return is_number(value) and is_number(other) and bool(compare(value, other))

    return check


class NumberValidator(BaseValidator):
    """
    Validates numeric values.

    Every instance starts with an implicit "Value must be a number" rule.

    Example::

        balance = number().required().positive().greater("dew")
    """

    @property
    def type_name(self) -> str:
        return "number"

    def _type_rule(self) -> Rule:
        return Rule(
            name="type_check",
            check=lambda value, record: is_number(value),
            message="Value must be a number",
        )

    def required(self, *, message: RuleMessage = "Value is required") -> "NumberValidator":
        """Value must be present; 0 counts as present, the empty string does not."""
        return self.add_rule("required", lambda value, record: value is not None and value != "", message)

    def integer(self, *, message: RuleMessage = "Value must be an integer") -> "NumberValidator":
        return self.add_rule(
            "integer",
            _numeric_only(lambda value: isinstance(value, int) or value.is_integer()),
            message,
        )

    def positive(self, *, message: RuleMessage = "Value must be positive") -> "NumberValidator":
        return self.add_rule("positive", _numeric_only(lambda value: value > 0), message)

    def negative(self, *, message: RuleMessage = "Value must be negative") -> "NumberValidator":
        return self.add_rule("negative", _numeric_only(lambda value: value < 0), message)

    def min(self, limit: int | float, *, message: RuleMessage | None = None) -> "NumberValidator":
        """Value must be at least ``limit`` (inclusive)."""
        if message is None:
            message = lambda value: f"Value must be at least {limit}, but got {value}"
        return self.add_rule("min", _numeric_only(lambda value: value >= limit), message)

    def max(self, limit: int | float, *, message: RuleMessage | None = None) -> "NumberValidator":
        """Value must be at most ``limit`` (inclusive)."""
        if message is None:
            message = lambda value: f"Value must be at most {limit}, but got {value}"
        return self.add_rule("max", _numeric_only(lambda value: value <= limit), message)

    def greater(self, field: str, *, message: RuleMessage | None = None) -> "NumberValidator":
        return self.add_rule(
            "greater",
            _compare_field(field, operator.gt),
            message if message is not None else f"Value must be greater than {field}",
        )

    def less(self, field: str, *, message: RuleMessage | None = None) -> "NumberValidator":
        return self.add_rule(
            "less",
            _compare_field(field, operator.lt),
            message if message is not None else f"Value must be less than {field}",
        )

    def greater_equal(self, field: str, *, message: RuleMessage | None = None) -> "NumberValidator":
        return self.add_rule(
            "greater_equal",
            _compare_field(field, operator.ge),
            message if message is not None else f"Value must be greater than or equal to {field}",
        )

    def less_equal(self, field: str, *, message: RuleMessage | None = None) -> "NumberValidator":
        return self.add_rule(
            "less_equal",
            _compare_field(field, operator.le),
            message if message is not None else f"Value must be less than or equal to {field}",
        )


def number(options: dict[str, Any] | None = None) -> NumberValidator:
    """Create a numeric-rule field validator."""
    return NumberValidator(options)
