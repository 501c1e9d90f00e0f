"""
Schema validation engine and configuration management.
"""

from .rule_config import SchemaConfigLoader, build_schema
from .rule_engine import Exterminator

__all__ = [
    "Exterminator",
    "SchemaConfigLoader",
    "build_schema",
]
