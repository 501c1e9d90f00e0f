"""
Exterminator - declarative object validation.

Define a schema of chained field rules, then validate plain objects against it::

    from exterminator import Exterminator, number, string

    validator = Exterminator({
        "username": string().required().alpha_numeric().min(3).lowercase().trim(),
        "email": string().required().email(domains=["gmail.com"]),
        "age": number().integer().positive(),
    })
    result = validator.validate(person)   # True, or a ValidationReport
"""

from exterminator.core.models import FieldResult, Rule, RuleOutcome, RuleStatus, ValidationReport
from exterminator.core.rules import Exterminator, SchemaConfigLoader, build_schema
from exterminator.core.validators import (
    BaseValidator,
    NumberValidator,
    SetupError,
    StringValidator,
    number,
    string,
)

__version__ = "0.1.0"

__all__ = [
    "Exterminator",
    "SchemaConfigLoader",
    "build_schema",
    "BaseValidator",
    "StringValidator",
    "NumberValidator",
    "SetupError",
    "string",
    "number",
    "Rule",
    "RuleOutcome",
    "RuleStatus",
    "FieldResult",
    "ValidationReport",
]
