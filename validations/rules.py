"""
Field rule table.

Each field compiles to an ordered list of (predicate, message) rules. One
generic evaluator applies them:

- blank value: only the required rule matters (optional blanks are valid)
- non-blank value: every rule is evaluated, so a field can collect several
  messages
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Tuple

from helpers.numbers import is_blank, parse_finite_number
from strategies.base_schema import FieldMetadata

VALID_NUMBER_MESSAGE = "Must be a valid number"


@dataclass(frozen=True)
class FieldRule:
    """A single check; ``passes`` receives the trimmed, non-blank value."""
    name: str
    message: str
    passes: Callable[[str], bool]


@dataclass(frozen=True)
class FieldRuleSet:
    binding: str
    required: bool
    required_message: str
    rules: Tuple[FieldRule, ...]


def _is_number(text: str) -> bool:
    return parse_finite_number(text) is not None


def _at_least(bound: float) -> Callable[[str], bool]:
    def check(text: str) -> bool:
        number = parse_finite_number(text)
        return number is None or number >= bound
    return check


def _at_most(bound: float) -> Callable[[str], bool]:
    def check(text: str) -> bool:
        number = parse_finite_number(text)
        return number is None or number <= bound
    return check


def build_field_rules(field: FieldMetadata) -> FieldRuleSet:
    """Compile field metadata into its rule set."""
    rules: List[FieldRule] = []

    if field.is_numeric:
        rules.append(FieldRule("number", VALID_NUMBER_MESSAGE, _is_number))

    # Bounds only judge parseable values; unparseable ones are the number rule's job.
    if field.min_value is not None:
        rules.append(FieldRule("min", f"Must be at least {field.min}", _at_least(field.min_value)))

    if field.max_value is not None:
        rules.append(FieldRule("max", f"Must be at most {field.max}", _at_most(field.max_value)))

    return FieldRuleSet(
        binding=field.binding,
        required=field.required,
        required_message=f"{field.binding} is required",
        rules=tuple(rules),
    )


def evaluate_rules(rule_set: FieldRuleSet, value: Any) -> List[str]:
    """Messages for every rule the value fails, in rule order."""
    if is_blank(value):
        return [rule_set.required_message] if rule_set.required else []

    text = str(value).strip()
    return [rule.message for rule in rule_set.rules if not rule.passes(text)]


def describe_rules(rule_set: FieldRuleSet) -> List[Tuple[str, str]]:
    """(name, message) pairs, required rule first when present."""
    described: List[Tuple[str, str]] = []
    if rule_set.required:
        described.append(("required", rule_set.required_message))
    described.extend((rule.name, rule.message) for rule in rule_set.rules)
    return described
