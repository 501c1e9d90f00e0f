"""
Schema validator: runs field validators over whole objects.

The ``Exterminator`` checks that an object has exactly the fields its schema
declares, then validates each field and aggregates the failures.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, Literal

from exterminator.core.models import ValidationReport
from exterminator.core.validators import BaseValidator
from exterminator.observability.logger import get_logger

logger = get_logger(__name__)

ValidationOutcome = Literal[True] | ValidationReport


class Exterminator:
    """
    Validates objects against a schema of field validators.

    Example::

        validator = Exterminator({
            "name": string().required().min(3).max(30),
            "balance": number().required().greater("dew"),
            "dew": number(),
        })
        result = validator.validate({"name": "Sizar", "balance": 100, "dew": 500})
        if result is not True:
            print(result.errors)   # {"balance": ["Value must be greater than dew"]}
    """

    def __init__(self, schema: Mapping[str, BaseValidator]):
        """
        Initialize the schema validator.

        Args:
            schema: Mapping of field name to a configured field validator

        Raises:
            TypeError: If a schema entry is not a field validator
        """
        for field_name, validator in schema.items():
            if not isinstance(validator, BaseValidator):
                raise TypeError(
                    f"Schema field '{field_name}' must be a field validator, got {type(validator).__name__}"
                )
        self.schema: dict[str, BaseValidator] = dict(schema)

    def validate(self, obj: Mapping[str, Any]) -> ValidationOutcome:
        """
        Validate an object against the schema.

        Args:
            obj: The object to validate

        Returns:
            True when every field passes, otherwise a ValidationReport
        """
        if set(self.schema) != set(obj):
            logger.debug(
                "Schema and object keys differ",
                extra={
                    "missing_fields": sorted(set(self.schema) - set(obj)),
                    "unexpected_fields": sorted(set(obj) - set(self.schema)),
                },
            )
            return ValidationReport.key_mismatch()

        record = MappingProxyType(dict(obj))
        errors: dict[str, list[str]] = {}

        for field_name, validator in self.schema.items():
            result = validator.validate(record[field_name], record)
            if not result:
                errors[field_name] = result.errors

        if not errors:
            return True

        logger.debug(
            f"Validation failed for {len(errors)} field(s)",
            extra={"failed_fields": list(errors)},
        )
        return ValidationReport(errors=errors)

    def validate_many(self, objects: Iterable[Mapping[str, Any]]) -> list[ValidationOutcome]:
        """Validate each object in turn."""
        return [self.validate(obj) for obj in objects]

    def get_schema_summary(self) -> dict[str, Any]:
        """
        Get summary of the configured schema.

        Returns:
            Dictionary with field and rule counts
        """
        return {
            "total_fields": len(self.schema),
            "total_rules": sum(len(v.rules) for v in self.schema.values()),
            "fields_by_type": self._count_fields_by_type(),
            "rules_by_name": self._count_rules_by_name(),
        }

    def _count_fields_by_type(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for validator in self.schema.values():
            counts[validator.type_name] = counts.get(validator.type_name, 0) + 1
        return counts

    def _count_rules_by_name(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for validator in self.schema.values():
            for rule in validator.rules:
                counts[rule.name] = counts.get(rule.name, 0) + 1
        return counts
