"""
Command-line interface for validating data files against a YAML schema.

Usage:
    exterminator check --schema <schema.yaml> --input <data.json> [options]
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import yaml

from exterminator.core.models import ValidationReport
from exterminator.core.rules import SchemaConfigLoader
from exterminator.observability.logger import configure_loggers, get_logger, log_operation

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_ERROR = 2

logger = get_logger(__name__)


def load_input(path: Path, file_format: str) -> list[dict[str, Any]] | dict[str, Any]:
    """
    Read the objects to validate.

    Args:
        path: Input file
        file_format: "json" or "yaml"

    Returns:
        A single object or a list of objects

    Raises:
        ValueError: If the file cannot be parsed or holds something else
    """
    with open(path) as f:
        try:
            data = json.load(f) if file_format == "json" else yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValueError(f"Cannot parse {path}: {e}")

    if isinstance(data, dict):
        return data
    if isinstance(data, list) and all(isinstance(item, dict) for item in data):
        return data
    raise ValueError(f"{path} must contain an object or a list of objects")


def _serialize(outcome: Any) -> Any:
    if isinstance(outcome, ValidationReport):
        return outcome.to_dict()
    return outcome


def check_command(args) -> int:
    """
    Execute the check command.

    Args:
        args: Command-line arguments

    Returns:
        Process exit status
    """
    input_path = Path(args.input)
    if not input_path.exists():
        logger.error(f"Input file not found: {args.input}")
        return EXIT_ERROR

    file_format = args.format or ("yaml" if input_path.suffix in (".yaml", ".yml") else "json")

    try:
        exterminator = SchemaConfigLoader(args.schema).load()
        data = load_input(input_path, file_format)
    except (FileNotFoundError, ValueError, TypeError) as e:
        logger.error(f"Cannot start validation: {e}")
        return EXIT_ERROR

    with log_operation("Validating input", logger=logger, input_file=str(input_path)):
        if isinstance(data, dict):
            outcomes = [exterminator.validate(data)]
            output = _serialize(outcomes[0])
        else:
            outcomes = exterminator.validate_many(data)
            output = [_serialize(outcome) for outcome in outcomes]

    invalid = sum(1 for outcome in outcomes if outcome is not True)
    logger.info(f"Objects validated: {len(outcomes)}, invalid: {invalid}")

    print(json.dumps(output, indent=args.indent))
    return EXIT_INVALID if invalid else EXIT_VALID


def build_parser() -> argparse.ArgumentParser:
    # Shared by the top-level parser and every subcommand
    logging_parser = argparse.ArgumentParser(add_help=False)
    logging_parser.add_argument(
        "--log-level",
        default=argparse.SUPPRESS,
        help="Log level (default: LOG_LEVEL environment variable or INFO)"
    )

    parser = argparse.ArgumentParser(
        prog="exterminator",
        parents=[logging_parser],
        description="Validate objects against a declarative schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate one JSON object
  exterminator check --schema config/person.yaml --input person.json

  # Validate a YAML list of objects with debug logging
  exterminator check --schema config/person.yaml --input people.yaml --log-level DEBUG
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    check_parser = subparsers.add_parser("check", parents=[logging_parser], help="Validate a data file")
    check_parser.add_argument(
        "--schema",
        required=True,
        help="Path to schema YAML file"
    )
    check_parser.add_argument(
        "--input",
        required=True,
        help="Path to JSON or YAML file holding an object or a list of objects"
    )
    check_parser.add_argument(
        "--format",
        choices=["json", "yaml"],
        default=None,
        help="Input file format (default: from file extension, else json)"
    )
    check_parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON output indentation (default: 2)"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    log_level = getattr(args, "log_level", None)
    if log_level:
        configure_loggers(level=log_level)

    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    if args.command == "check":
        return check_command(args)
    return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
