"""
Grid Calculation Engine

Pure functions over the grid's string field values:
- ``calculate_grid_levels``: ladder preview (fixed visualization depth)
- ``calculate_max_returns``: projected return over a fixed horizon

Both fail totally (empty ladder / zero) when any input is missing,
non-numeric, or not strictly positive.
"""

from typing import Dict, List, Optional, Tuple

from helpers.numbers import parse_finite_number
from helpers.unified_logger import get_strategy_logger
from strategies.base_strategy import GridLevel, StrategyCalculations

BASELINE_FIELD = "baseline-io-ratio"
GROWTH_FIELD = "io-ratio-growth"
TRANCHE_FIELD = "tranche-size"

# Ladder preview depth and return horizon differ on purpose; keep both.
GRID_VISUALIZATION_LEVELS = 5
MAX_RETURNS_HORIZON = 10

logger = get_strategy_logger("grid_calculations")


def _parse_inputs(field_values: Dict[str, str]) -> Optional[Tuple[float, float, float]]:
    baseline = parse_finite_number(field_values.get(BASELINE_FIELD))
    growth = parse_finite_number(field_values.get(GROWTH_FIELD))
    tranche_size = parse_finite_number(field_values.get(TRANCHE_FIELD))

    for number in (baseline, growth, tranche_size):
        if number is None or not number > 0:
            return None
    return baseline, growth, tranche_size


def _level_price(baseline: float, growth: float, index: int) -> float:
    return baseline * (1 + growth) ** index


class GridCalculations(StrategyCalculations):
    """Ladder and return calculations for the grid strategy."""

    def calculate_max_returns(self, field_values: Dict[str, str]) -> float:
        try:
            inputs = _parse_inputs(field_values)
            if inputs is None:
                return 0
            baseline, growth, tranche_size = inputs

            total_returns = 0.0
            for i in range(MAX_RETURNS_HORIZON):
                total_returns += _level_price(baseline, growth, i) * tranche_size
            return total_returns
        except (ArithmeticError, TypeError) as e:
            logger.error(f"Error calculating max returns: {e}")
            return 0

    def calculate_grid_levels(self, field_values: Dict[str, str]) -> List[GridLevel]:
        try:
            inputs = _parse_inputs(field_values)
            if inputs is None:
                return []
            baseline, growth, tranche_size = inputs

            levels = []
            for i in range(GRID_VISUALIZATION_LEVELS):
                price = _level_price(baseline, growth, i)
                levels.append(
                    GridLevel(level=i + 1, price=price, amount=tranche_size, total=price * tranche_size)
                )
            return levels
        except (ArithmeticError, TypeError) as e:
            logger.error(f"Error calculating grid levels: {e}")
            return []


_default_calculations = GridCalculations()


def calculate_max_returns(field_values: Dict[str, str]) -> float:
    return _default_calculations.calculate_max_returns(field_values)


def calculate_grid_levels(field_values: Dict[str, str]) -> List[GridLevel]:
    return _default_calculations.calculate_grid_levels(field_values)
