"""
StringValidator - fluent rule builder for text fields.
"""

import re
from collections.abc import Callable, Iterable
from re import Pattern
from typing import Any

from exterminator.core.models import Rule
from exterminator.core.models.rule import RuleMessage

from .base_validator import BaseValidator, SetupError, as_list, compile_pattern

ALPHANUMERIC_PATTERN = re.compile(r"^[a-zA-Z0-9]+$", re.IGNORECASE)
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,4}$", re.IGNORECASE)

# Minimum eight characters, one lowercase, one uppercase, one digit, one of @$!%*?&
PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,}$")

PHONE_PATTERNS: dict[str, Pattern] = {
    "us": re.compile(r"^\(\d{3}\) \d{3}-\d{4}$"),
    "eu": re.compile(r"^\+?\d{2,3}[-.\s]?\d{6,9}$"),
}


def _text_only(predicate: Callable[[str], bool]) -> Callable[[Any, Any], bool]:
    """Wrap a text predicate so non-string values fail instead of raising."""

    def check(value: Any, record: Any) -> bool:
        return isinstance(value, str) and bool(predicate(value))

    return check


def _full_match(pattern: Pattern) -> Callable[[Any, Any], bool]:
    return _text_only(lambda value: pattern.fullmatch(value) is not None)


def _search(pattern: Pattern) -> Callable[[Any, Any], bool]:
    return _text_only(lambda value: pattern.search(value) is not None)


class StringValidator(BaseValidator):
    """
    Validates text values.

    Every instance starts with an implicit "Value must be a string" rule.

    Example::

        username = string().required().alpha_numeric().min(3).max(30).lowercase().trim()
    """

    @property
    def type_name(self) -> str:
        return "string"

    def _type_rule(self) -> Rule:
        return Rule(
            name="type_check",
            check=lambda value, record: isinstance(value, str),
            message="Value must be a string",
        )

    def required(self, *, message: RuleMessage = "Value is required") -> "StringValidator":
        """Value must be present and not blank."""
        return self.add_rule(
            "required",
            lambda value, record: value is not None and (not isinstance(value, str) or value.strip() != ""),
            message,
        )

    def alpha_numeric(self, *, message: RuleMessage = "Value must be alphanumeric") -> "StringValidator":
        return self.add_rule("alpha_numeric", _full_match(ALPHANUMERIC_PATTERN), message)

    def min(self, length: int, *, message: RuleMessage | None = None) -> "StringValidator":
        """Value must be at least ``length`` characters long."""
        if message is None:
            message = lambda value: f"Value must be at least {length} characters long, but got {value}"
        return self.add_rule("min", _text_only(lambda value: len(value) >= length), message)

    def max(self, length: int, *, message: RuleMessage | None = None) -> "StringValidator":
        """Value must be at most ``length`` characters long."""
        if message is None:
            message = lambda value: f"Value must be at most {length} characters long, but got {value}"
        return self.add_rule("max", _text_only(lambda value: len(value) <= length), message)

    def lowercase(self, *, message: RuleMessage = "Value must be lowercase") -> "StringValidator":
        return self.add_rule("lowercase", _text_only(lambda value: value == value.lower()), message)

    def uppercase(self, *, message: RuleMessage = "Value must be uppercase") -> "StringValidator":
        return self.add_rule("uppercase", _text_only(lambda value: value == value.upper()), message)

    def email(
        self,
        *,
        domains: Iterable[str] = (),
        exclude_domains: Iterable[str] = (),
        message: RuleMessage = "Value must be a valid email",
    ) -> "StringValidator":
        """
        Value must be an email address, optionally restricted by domain.

        Args:
            domains: Allowed domains (empty allows any)
            exclude_domains: Rejected domains
            message: Message for a malformed address

        A domain present in both lists leaves the validator in an invalid
        setup state: every later validation reports only that problem.
        """
        domains = as_list(domains)
        exclude_domains = as_list(exclude_domains)

        common = [domain for domain in domains if domain in exclude_domains]
        if common:
            return self._fail_setup(
                "email", f"Domains {', '.join(common)} cannot be both allowed and excluded."
            )

        def resolve(value: Any) -> str:
            return message(value) if callable(message) else message

        def check(value: Any, record: Any) -> bool | str:
            if not isinstance(value, str) or not EMAIL_PATTERN.fullmatch(value):
                return resolve(value)

            domain = value.split("@")[1]
            if domains and domain not in domains:
                return f"Email domain must be one of {', '.join(domains)}"
            if exclude_domains and domain in exclude_domains:
                return f"Email domain must not be one of {', '.join(exclude_domains)}"
            return True

        return self.add_rule("email", check, message)

    def phone(
        self,
        region: str = "us",
        *,
        pattern: str | Pattern | None = None,
        message: RuleMessage = "Value must be a valid phone number",
    ) -> "StringValidator":
        """
        Value must be a phone number for the region ("us" or "eu").

        Raises:
            SetupError: If the region is not supported
        """
        if region not in PHONE_PATTERNS:
            raise SetupError("phone", f"Unsupported region: {region}")

        if pattern is None:
            return self.add_rule("phone", _full_match(PHONE_PATTERNS[region]), message)
        return self.add_rule("phone", _search(compile_pattern("phone", pattern)), message)

    def password(
        self,
        pattern: str | Pattern | None = None,
        *,
        message: RuleMessage = "Password does not meet the requirements",
    ) -> "StringValidator":
        """Value must satisfy the default strength pattern, or ``pattern`` if given."""
        if pattern is None:
            return self.add_rule("password", _full_match(PASSWORD_PATTERN), message)
        return self.add_rule("password", _search(compile_pattern("password", pattern)), message)

    def regex(
        self,
        pattern: str | Pattern,
        *,
        message: RuleMessage = "Value does not match the pattern",
    ) -> "StringValidator":
        return self.add_rule("regex", _search(compile_pattern("regex", pattern)), message)

    def trim(self) -> "StringValidator":
        """Strip surrounding whitespace before rules run."""
        return self.preprocess(lambda value: value.strip() if isinstance(value, str) else value)


def string(options: dict[str, Any] | None = None) -> StringValidator:
    """Create a text-rule field validator."""
    return StringValidator(options)
