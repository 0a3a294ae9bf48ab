"""
Strategy Implementations

Concrete strategy configurations organized by type:
- grid: fixed price ladder on an onchain order book
"""

from .grid import GridStrategyConfig

__all__ = [
    'GridStrategyConfig',
]
