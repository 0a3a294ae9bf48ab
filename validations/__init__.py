"""
Validation package: rule table, dynamic schema builder and the safe_parse contract.
"""

from .rules import FieldRule, FieldRuleSet, build_field_rules, evaluate_rules
from .schema_builder import (
    DynamicSchemaBuilder,
    FieldSchema,
    ObjectSchema,
    SafeParseResult,
    ValidationIssue,
    build_schema_for_strategy,
    validate_field,
)

__all__ = [
    "FieldRule",
    "FieldRuleSet",
    "build_field_rules",
    "evaluate_rules",
    "DynamicSchemaBuilder",
    "FieldSchema",
    "ObjectSchema",
    "SafeParseResult",
    "ValidationIssue",
    "build_schema_for_strategy",
    "validate_field",
]
