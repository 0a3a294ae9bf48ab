"""
Grid Strategy Configuration

Bundles the grid's field metadata, calculations and whole-form schema
behind the StrategyConfig interface.
"""

from typing import List

from strategies.base_schema import FieldMetadata
from strategies.base_strategy import StrategyCalculations, StrategyConfig

from .calculations import GridCalculations
from .schema import GRID_FIELD_METADATA, GridFormSchema


class GridStrategyConfig(StrategyConfig):
    """A strategy that places automated orders at fixed price intervals."""

    name = "Grid"
    description = "A strategy that places automated orders at fixed price intervals"
    version = "1.0.0"

    def __init__(self):
        self._fields = tuple(GRID_FIELD_METADATA)
        self._calculations = GridCalculations()
        self._schema = GridFormSchema()

    def get_all_field_metadata(self) -> List[FieldMetadata]:
        return list(self._fields)

    def get_calculations(self) -> StrategyCalculations:
        return self._calculations

    def get_validation_schema(self) -> GridFormSchema:
        return self._schema
