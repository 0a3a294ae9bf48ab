"""
Base Field Metadata System for Strategy Configuration

Provides a structured way to describe strategy parameters with bounds,
required flags, help text and custom messages. Used by the dynamic schema
builder to generate validators and by the UI layer to render inputs.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from deployment.exceptions import ConfigurationError
from helpers.numbers import parse_finite_number


class InputType(Enum):
    """Input widget / data types."""
    NUMBER = "number"
    TEXT = "text"
    SELECT = "select"


@dataclass(frozen=True)
class FieldValidation:
    """Validation flags attached to a field."""
    required: bool = False
    custom_message: Optional[str] = None


@dataclass(frozen=True)
class FieldMetadata:
    """
    Metadata for a single strategy field.

    ``min`` and ``max`` are kept as the numeric strings they were declared
    with so error messages echo them verbatim ("Must be at least 0").
    """
    # Basic info
    binding: str
    input_type: InputType

    # UI hints
    placeholder: str = ""
    help_text: str = ""
    step: Optional[str] = None

    # Bounds
    min: Optional[str] = None
    max: Optional[str] = None

    # Validation
    validation: FieldValidation = field(default_factory=FieldValidation)

    def __post_init__(self):
        if not self.binding:
            raise ConfigurationError("Field binding must be a non-empty string")

        for label, bound in (("min", self.min), ("max", self.max)):
            if bound is not None and parse_finite_number(bound) is None:
                raise ConfigurationError(f"{self.binding}: {label} bound {bound!r} is not a number")

        min_value, max_value = self.min_value, self.max_value
        if min_value is not None and max_value is not None and min_value > max_value:
            raise ConfigurationError(
                f"{self.binding}: min ({self.min}) must be <= max ({self.max})"
            )

    @property
    def required(self) -> bool:
        return self.validation.required

    @property
    def custom_message(self) -> Optional[str]:
        return self.validation.custom_message

    @property
    def is_numeric(self) -> bool:
        return self.input_type == InputType.NUMBER

    @property
    def min_value(self) -> Optional[float]:
        return parse_finite_number(self.min) if self.min is not None else None

    @property
    def max_value(self) -> Optional[float]:
        return parse_finite_number(self.max) if self.max is not None else None


def required_bindings(fields: List[FieldMetadata]) -> List[str]:
    """Bindings flagged as required, in declaration order."""
    return [f.binding for f in fields if f.required]
