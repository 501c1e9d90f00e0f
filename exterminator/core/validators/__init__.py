"""
Field validator implementations.

Provides fluent rule builders for text and numeric fields.
"""

from .base_validator import NULL_MESSAGE, BaseValidator, SetupError
from .number_validator import NumberValidator, number
from .string_validator import StringValidator, string

__all__ = [
    "BaseValidator",
    "SetupError",
    "NULL_MESSAGE",
    "StringValidator",
    "NumberValidator",
    "string",
    "number",
]
