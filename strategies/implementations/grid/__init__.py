"""
Grid Strategy Configuration

A fixed price ladder deployed onto an onchain order book:
- Buy orders at geometrically increasing prices (grid levels)
- A fixed token amount (tranche) per level
- Optional refill delay per tranche
"""

from .calculations import (
    GridCalculations,
    calculate_grid_levels,
    calculate_max_returns,
)
from .config import GridStrategyConfig
from .schema import GRID_FIELD_METADATA, GridFormModel, GridFormSchema

__all__ = [
    'GridStrategyConfig',
    'GridCalculations',
    'calculate_grid_levels',
    'calculate_max_returns',
    'GRID_FIELD_METADATA',
    'GridFormModel',
    'GridFormSchema',
]
