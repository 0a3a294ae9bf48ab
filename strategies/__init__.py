"""
Strategy Configuration Module
Describes deployable strategies: their fields, calculations and schemas.

Architecture:
- FieldMetadata: per-field type, bounds, required flag and messages
- StrategyConfig: ordered field metadata + calculations + form schema
- StrategyRegistry: explicit key -> config map, injected into consumers

Concrete configurations live under ``strategies.implementations`` and are
registered by ``create_default_registry``.
"""

from .base_schema import FieldMetadata, FieldValidation, InputType
from .base_strategy import GridLevel, StrategyCalculations, StrategyConfig
from .registry import StrategyRegistry, create_default_registry

__all__ = [
    'FieldMetadata',
    'FieldValidation',
    'InputType',
    'GridLevel',
    'StrategyCalculations',
    'StrategyConfig',
    'StrategyRegistry',
    'create_default_registry',
]
