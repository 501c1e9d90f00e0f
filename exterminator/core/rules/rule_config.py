"""
Schema configuration management.

Loads field validators from YAML files so schemas can live outside code.
"""

from pathlib import Path
from typing import Any

import yaml

from exterminator.core.validators import BaseValidator, NumberValidator, SetupError, StringValidator

from .rule_engine import Exterminator

VALIDATOR_REGISTRY: dict[str, type[BaseValidator]] = {
    "string": StringValidator,
    "number": NumberValidator,
}

_COMMON_METHODS = frozenset({"required", "one_of", "equals", "optional", "nullable"})

# Builder methods reachable from configuration, per field type
RULE_METHODS: dict[str, frozenset[str]] = {
    "string": _COMMON_METHODS | {
        "min", "max", "alpha_numeric", "lowercase", "uppercase",
        "email", "phone", "password", "regex", "trim",
    },
    "number": _COMMON_METHODS | {
        "integer", "positive", "negative", "min", "max",
        "greater", "less", "greater_equal", "less_equal",
    },
}


def build_schema(config: dict[str, Any]) -> dict[str, BaseValidator]:
    """
    Build field validators from a parsed configuration.

    Args:
        config: Mapping with a "fields" section

    Returns:
        Schema mapping field names to configured validators

    Raises:
        ValueError: If the configuration is malformed
    """
    if not isinstance(config, dict) or "fields" not in config:
        raise ValueError("Configuration must contain 'fields' section")

    fields = config["fields"]
    if not isinstance(fields, dict):
        raise ValueError("'fields' section must be a mapping of field names")

    return {field_name: _build_field(field_name, field_def) for field_name, field_def in fields.items()}


def _build_field(field_name: str, field_def: Any) -> BaseValidator:
    if not isinstance(field_def, dict):
        raise ValueError(f"Definition for field '{field_name}' must be a mapping")

    if "type" not in field_def:
        raise ValueError(f"Field '{field_name}' is missing 'type'")

    type_name = field_def["type"]
    validator_class = VALIDATOR_REGISTRY.get(type_name)
    if not validator_class:
        raise ValueError(f"Unknown field type '{type_name}' for field '{field_name}'")

    validator = validator_class(field_def.get("options"))

    rules = field_def.get("rules", [])
    if not isinstance(rules, list):
        raise ValueError(f"Rules for field '{field_name}' must be a list")

    for rule_def in rules:
        _apply_rule(validator, field_name, rule_def)

    return validator


def _apply_rule(validator: BaseValidator, field_name: str, rule_def: Any) -> None:
    """
    Apply one rule entry to a validator.

    Accepted forms::

        - required                      # bare method name
        - min: 3                        # primary argument
        - one_of: [Male, Female]        # primary argument
        - email: {domains: [a.com]}     # keyword options
        - max: {value: 30, message: "Too long"}
    """
    if isinstance(rule_def, str):
        method_name, argument = rule_def, None
    elif isinstance(rule_def, dict) and len(rule_def) == 1:
        method_name, argument = next(iter(rule_def.items()))
    else:
        raise ValueError(f"Rule for field '{field_name}' must be a name or a single-key mapping, got {rule_def!r}")

    if method_name not in RULE_METHODS[validator.type_name]:
        raise ValueError(f"Unknown {validator.type_name} rule '{method_name}' for field '{field_name}'")

    method = getattr(validator, method_name)
    args: list[Any] = []
    kwargs: dict[str, Any] = {}

    if isinstance(argument, dict):
        kwargs = dict(argument)
        if "value" in kwargs:
            args.append(kwargs.pop("value"))
    elif argument is not None:
        args.append(argument)

    try:
        method(*args, **kwargs)
    except TypeError as e:
        raise ValueError(f"Invalid arguments for rule '{method_name}' on field '{field_name}': {e}")
    except SetupError as e:
        raise SetupError(e.rule_name, f"Field '{field_name}': {e.message}")


class SchemaConfigLoader:
    """
    Loads a validation schema from a YAML configuration file.

    Expected YAML format:
    ```yaml
    fields:
      username:
        type: string
        rules:
          - required
          - alpha_numeric
          - min: 3
          - max: {value: 30, message: "Username is too long"}
          - lowercase
          - trim

      email:
        type: string
        rules:
          - required
          - email:
              domains: [exterminator.com, gmail.com]

      balance:
        type: number
        rules:
          - required
          - greater: dew
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the schema config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Schema configuration file not found: {config_path}")

    def load_schema(self) -> dict[str, BaseValidator]:
        """
        Load and build the schema from the YAML file.

        Raises:
            ValueError: If YAML is invalid or the schema is malformed
        """
        with open(self.config_path) as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {self.config_path}: {e}")

        return build_schema(config)

    def load(self) -> Exterminator:
        """Load the schema and wrap it in a schema validator."""
        return Exterminator(self.load_schema())
