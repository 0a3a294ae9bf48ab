"""
Dynamic Schema Builder

Builds validators at run time from a strategy's field metadata. The object
schema checks ``{"parameters": {binding: value}}`` and reports issues keyed
``parameters.<binding>``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from strategies.base_schema import FieldMetadata
from strategies.base_strategy import StrategyConfig

from .rules import FieldRuleSet, build_field_rules, evaluate_rules

PARAMETERS_KEY = "parameters"


@dataclass(frozen=True)
class ValidationIssue:
    path: str
    message: str


@dataclass(frozen=True)
class SafeParseResult:
    """
    Outcome of ``safe_parse``.

    ``value`` is set on success, ``errors`` on failure.
    """
    success: bool
    value: Optional[Any] = None
    errors: List[ValidationIssue] = field(default_factory=list)

    def error_map(self) -> Dict[str, List[str]]:
        """Messages grouped by path, in issue order."""
        grouped: Dict[str, List[str]] = {}
        for issue in self.errors:
            grouped.setdefault(issue.path, []).append(issue.message)
        return grouped


class FieldSchema:
    """Validator for a single field."""

    def __init__(self, rule_set: FieldRuleSet):
        self.rule_set = rule_set

    @property
    def binding(self) -> str:
        return self.rule_set.binding

    def errors_for(self, value: Any) -> List[str]:
        return evaluate_rules(self.rule_set, value)

    def safe_parse(self, value: Any) -> SafeParseResult:
        messages = self.errors_for(value)
        if messages:
            return SafeParseResult(
                success=False,
                errors=[ValidationIssue(self.binding, message) for message in messages],
            )
        return SafeParseResult(success=True, value=value)


class ObjectSchema:
    """Validator for a strategy's parameter set; fields keep declaration order."""

    def __init__(self, fields: Dict[str, FieldSchema]):
        self.fields = fields

    def safe_parse(self, value: Optional[Mapping[str, Any]]) -> SafeParseResult:
        parameters = (value or {}).get(PARAMETERS_KEY) or {}
        issues: List[ValidationIssue] = []
        parsed: Dict[str, Any] = {}

        for binding, schema in self.fields.items():
            field_value = parameters.get(binding)
            for message in schema.errors_for(field_value):
                issues.append(ValidationIssue(f"{PARAMETERS_KEY}.{binding}", message))
            parsed[binding] = field_value if field_value is not None else ""

        if issues:
            return SafeParseResult(success=False, errors=issues)
        return SafeParseResult(success=True, value={PARAMETERS_KEY: parsed})


class DynamicSchemaBuilder:
    """Creates validation schemas from strategy configuration."""

    @staticmethod
    def build_field_schema(field_metadata: FieldMetadata) -> FieldSchema:
        return FieldSchema(build_field_rules(field_metadata))

    @classmethod
    def build_schema_for_strategy(cls, strategy: StrategyConfig) -> ObjectSchema:
        fields: Dict[str, FieldSchema] = {}
        for field_metadata in strategy.get_all_field_metadata():
            fields[field_metadata.binding] = cls.build_field_schema(field_metadata)
        return ObjectSchema(fields)

    @classmethod
    def validate_field(cls, strategy: StrategyConfig, binding: str, value: Any) -> List[str]:
        """
        Errors for one field's value.

        An unknown binding yields ``[]``; an empty result does not mean the
        field exists.
        """
        field_metadata = strategy.get_field_metadata(binding)
        if field_metadata is None:
            return []
        return cls.build_field_schema(field_metadata).errors_for(value)


build_schema_for_strategy = DynamicSchemaBuilder.build_schema_for_strategy
validate_field = DynamicSchemaBuilder.validate_field
