"""
Base Strategy Configuration Interface
Defines the contract that every deployable strategy configuration implements.

A strategy configuration bundles:
- Ordered field metadata (drives dynamic schema generation)
- Calculation functions (projected returns, ladder preview)
- A whole-form validation schema
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol

from .base_schema import FieldMetadata, required_bindings


@dataclass(frozen=True)
class GridLevel:
    """One rung of the price ladder."""
    level: int
    price: float
    amount: float
    total: float


class SafeParseSchema(Protocol):
    """Anything exposing the ``safe_parse`` validation contract."""

    def safe_parse(self, value): ...


class StrategyCalculations(ABC):
    """Pure calculations derived from a strategy's field values."""

    @abstractmethod
    def calculate_max_returns(self, field_values: Dict[str, str]) -> float:
        """Projected return for the given field values."""
        pass

    def calculate_grid_levels(self, field_values: Dict[str, str]) -> List[GridLevel]:
        """Ladder preview; strategies without a ladder return nothing."""
        return []


class StrategyConfig(ABC):
    """
    Base class for all strategy configurations.

    Instances are registered once in a StrategyRegistry and treated as
    read-only afterwards.
    """

    name: str = ""
    description: str = ""
    version: str = "0.0.0"

    @abstractmethod
    def get_all_field_metadata(self) -> List[FieldMetadata]:
        """All field metadata in declaration order."""
        pass

    @abstractmethod
    def get_calculations(self) -> StrategyCalculations:
        pass

    @abstractmethod
    def get_validation_schema(self) -> SafeParseSchema:
        """Whole-form schema (parameters, deposits, vault ids)."""
        pass

    def get_field_metadata(self, binding: str) -> Optional[FieldMetadata]:
        for metadata in self.get_all_field_metadata():
            if metadata.binding == binding:
                return metadata
        return None

    def get_required_fields(self) -> List[str]:
        return required_bindings(self.get_all_field_metadata())
