"""
Validation result models (ephemeral, produced by every validation call).
"""

from typing import Any

from pydantic import BaseModel, Field

KEY_MISMATCH_FIELD = "keys"
KEY_MISMATCH_MESSAGE = "Schema keys and validator keys are not the same"
FAILURE_MESSAGE = "Validation failed"


class FieldResult(BaseModel):
    """
    Outcome of validating one value with a field validator.

    The result is falsy when invalid, so callers can write::

        result = string().required().validate(value)
        if not result:
            print(result.errors)
    """

    errors: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True if no rule failed."""
        return not self.errors

    def __bool__(self) -> bool:
        return self.is_valid


class ValidationReport(BaseModel):
    """
    Failure report produced by the schema validator.

    Attributes:
        message: Always "Validation failed"
        errors: Field name -> that field's error messages, or a single
                "keys" entry when schema and object key sets differ
    """

    message: str = FAILURE_MESSAGE
    errors: dict[str, list[str]] = Field(default_factory=dict)

    @classmethod
    def key_mismatch(cls) -> "ValidationReport":
        return cls(errors={KEY_MISMATCH_FIELD: [KEY_MISMATCH_MESSAGE]})

    @property
    def is_valid(self) -> bool:
        return False

    def __bool__(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping form: {"message": ..., "errors": {...}}."""
        return self.model_dump()

    model_config = {
        "json_schema_extra": {
            "example": {
                "message": "Validation failed",
                "errors": {
                    "username": ["Value must be lowercase"],
                    "confirmPassword": ["Value must be equal to password"],
                },
            }
        }
    }
