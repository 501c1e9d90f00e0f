"""
Rule model: a single named check with its error message.
"""

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from exterminator.observability.logger import get_logger

logger = get_logger(__name__)

RuleCheck = Callable[[Any, Mapping[str, Any]], bool | str]
RuleMessage = str | Callable[[Any], str]


class RuleStatus(str, Enum):
    """Outcome tag of a single rule evaluation."""

    PASS = "pass"
    FAIL = "fail"
    FAIL_WITH = "fail_with"


class RuleOutcome(BaseModel):
    """
    Tagged result of evaluating a rule.

    ``FAIL`` carries the rule's own message, ``FAIL_WITH`` carries the
    specific message the check chose (e.g. "bad domain" vs "bad format").
    """

    model_config = ConfigDict(frozen=True)

    status: RuleStatus
    message: str | None = None

    @property
    def passed(self) -> bool:
        return self.status is RuleStatus.PASS


class Rule(BaseModel):
    """
    A configurable check bound to one field validator.

    Attributes:
        name: Builder method that produced the rule ("min", "email", ...)
        check: Callable taking (value, record). Returns True to pass, False to
               fail with ``message``, or a string to fail with that string.
        message: Static message, or a callable of the offending value
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    check: RuleCheck
    message: RuleMessage

    def resolve_message(self, value: Any) -> str:
        """Render the rule's message for the offending value."""
        if not callable(self.message):
            return self.message
        try:
            return str(self.message(value))
        except Exception as e:
            logger.debug(
                f"Message for rule '{self.name}' raised {type(e).__name__}",
                extra={"rule_name": self.name, "error_message": str(e)},
            )
            return f"Value failed rule '{self.name}'"

    def evaluate(self, value: Any, record: Mapping[str, Any]) -> RuleOutcome:
        """
        Run the check against a value.

        Args:
            value: The (preprocessed) field value
            record: Read-only view of the whole object being validated

        Returns:
            RuleOutcome tagged PASS, FAIL or FAIL_WITH
        """
        try:
            result = self.check(value, record)
        except Exception as e:
            logger.debug(
                f"Rule '{self.name}' raised {type(e).__name__}, counting as failure",
                extra={"rule_name": self.name, "error_message": str(e)},
            )
            result = False

        if result is True:
            return RuleOutcome(status=RuleStatus.PASS)
        if isinstance(result, str):
            return RuleOutcome(status=RuleStatus.FAIL_WITH, message=result)
        return RuleOutcome(status=RuleStatus.FAIL, message=self.resolve_message(value))

    def __repr__(self) -> str:
        return f"Rule(name={self.name!r})"
