"""
Base field validator shared by the string and number rule builders.

A field validator accumulates rules and preprocessors through fluent builder
methods (each returns the validator itself) and runs them with ``validate()``.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from re import Pattern
from types import MappingProxyType
from typing import Any

from exterminator.core.models import FieldResult, Rule, RuleOutcome
from exterminator.core.models.rule import RuleCheck, RuleMessage
from exterminator.observability.logger import get_logger

logger = get_logger(__name__)

NULL_MESSAGE = "Value cannot be null"

Preprocessor = Callable[[Any], Any]

_EMPTY_RECORD: Mapping[str, Any] = MappingProxyType({})


class SetupError(ValueError):
    """Raised when a builder method is called with an unusable configuration."""

    def __init__(self, rule_name: str, message: str):
        self.rule_name = rule_name
        self.message = message
        super().__init__(f"[{rule_name}] {message}")


def as_list(values: Iterable[Any] | str) -> list[Any]:
    """Listify an iterable argument, treating a bare string as one item."""
    if isinstance(values, str):
        return [values]
    return list(values)


def compile_pattern(rule_name: str, pattern: str | Pattern) -> Pattern:
    """Compile a string pattern, passing compiled patterns through."""
    if isinstance(pattern, Pattern):
        return pattern
    if not isinstance(pattern, str):
        raise SetupError(rule_name, f"Pattern must be string or compiled Pattern, got {type(pattern).__name__}")
    try:
        return re.compile(pattern)
    except re.error as e:
        raise SetupError(rule_name, f"Invalid regex pattern: {e}")


class BaseValidator(ABC):
    """
    Abstract base class for field validators.

    Validation protocol for one call:
    setup check -> optional check -> null check -> preprocess -> rule sweep.
    Every rule runs; all failing messages are collected in rule order.
    """

    def __init__(self, options: dict[str, Any] | None = None):
        """
        Initialize validator.

        Args:
            options: Caller options, stored as given
        """
        self.options = options or {}
        self.rules: list[Rule] = [self._type_rule()]
        self.preprocessors: list[Preprocessor] = []
        self.is_optional = False
        self.is_nullable = False
        self.invalid_setup: str | None = None

    @property
    @abstractmethod
    def type_name(self) -> str:
        """Return the field type identifier."""
        pass

    @abstractmethod
    def _type_rule(self) -> Rule:
        """Build the implicit base-type rule that runs before all others."""
        pass

    @abstractmethod
    def required(self, *, message: RuleMessage = "Value is required") -> "BaseValidator":
        pass

    def add_rule(self, name: str, check: RuleCheck, message: RuleMessage) -> "BaseValidator":
        """
        Append a rule.

        Args:
            name: Rule identifier
            check: Callable taking (value, record), returning True, False or a message
            message: Message used when the check returns False
        """
        if not callable(check):
            raise SetupError(name, "check must be callable")
        self.rules.append(Rule(name=name, check=check, message=message))
        return self

    def preprocess(self, func: Preprocessor) -> "BaseValidator":
        """Append a value transform applied before any rule runs."""
        if not callable(func):
            raise SetupError("preprocess", "preprocessor must be callable")
        self.preprocessors.append(func)
        return self

    def _fail_setup(self, rule_name: str, message: str) -> "BaseValidator":
        logger.warning(
            f"Invalid {self.type_name} validator setup: {message}",
            extra={"rule_name": rule_name},
        )
        self.invalid_setup = message
        return self

    def optional(self) -> "BaseValidator":
        """An empty-string value skips every rule."""
        self.is_optional = True
        return self

    def nullable(self) -> "BaseValidator":
        """A None value skips every rule."""
        self.is_nullable = True
        return self

    def one_of(self, allowed_values: Iterable[Any] = (), *, message: RuleMessage = "Invalid value") -> "BaseValidator":
        allowed = as_list(allowed_values)
        if not allowed:
            return self._fail_setup("one_of", "You must provide at least one allowed value.")
        return self.add_rule("one_of", lambda value, record: value in allowed, message)

    def equals(self, field: str, *, message: RuleMessage | None = None) -> "BaseValidator":
        """Value must equal another field's raw value in the same record."""
        return self.add_rule(
            "equals",
            lambda value, record: field in record and value == record[field],
            message if message is not None else f"Value must be equal to {field}",
        )

    def validate(self, value: Any, record: Mapping[str, Any] | None = None) -> FieldResult:
        """
        Validate a value against this field's rules.

        Args:
            value: The field value to validate
            record: The entire object (for cross-field rules)

        Returns:
            FieldResult with every failing rule's message, in rule order
        """
        if self.invalid_setup:
            return FieldResult(errors=[self.invalid_setup])

        if self.is_optional and value == "":
            return FieldResult()

        if value is None:
            if self.is_nullable:
                return FieldResult()
            return FieldResult(errors=[NULL_MESSAGE])

        for preprocessor in self.preprocessors:
            try:
                value = preprocessor(value)
            except Exception as e:
                # Value passes through unchanged; the rules report it
                logger.debug(
                    f"Preprocessor raised {type(e).__name__}, keeping value unchanged",
                    extra={"error_message": str(e)},
                )

        if record is None:
            view = _EMPTY_RECORD
        elif isinstance(record, MappingProxyType):
            view = record
        else:
            view = MappingProxyType(record)

        outcomes: list[RuleOutcome] = [rule.evaluate(value, view) for rule in self.rules]
        return FieldResult(errors=[o.message for o in outcomes if not o.passed])

    def __repr__(self) -> str:
        names = [rule.name for rule in self.rules]
        return f"{self.__class__.__name__}(rules={names}, optional={self.is_optional}, nullable={self.is_nullable})"
