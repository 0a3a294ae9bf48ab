"""
Strategy Registry
Maps a strategy key to its configuration.

The registry is a plain object: build it once (``create_default_registry``)
and pass it to the stores and validators that need it, so tests can swap in
fixture strategies.
"""

from typing import Dict, List, Optional

from helpers.unified_logger import get_strategy_logger

from .base_strategy import StrategyConfig


class StrategyRegistry:
    """Registry of available strategy configurations."""

    def __init__(self):
        self._strategies: Dict[str, StrategyConfig] = {}
        self.logger = get_strategy_logger("registry")

    def register(self, key: str, strategy: StrategyConfig) -> None:
        """
        Register a strategy configuration.

        Args:
            key: Strategy key (e.g. ``"grid"``)
            strategy: Configuration instance

        Raises:
            ValueError: If the configuration does not inherit from StrategyConfig
        """
        if not isinstance(strategy, StrategyConfig):
            raise ValueError(
                f"Strategy {type(strategy).__name__} must inherit from StrategyConfig"
            )
        if key in self._strategies:
            self.logger.warning(f"Replacing registered strategy '{key}'")
        self._strategies[key] = strategy

    def get(self, key: str) -> Optional[StrategyConfig]:
        """Strategy for ``key``, or None if it is not registered."""
        return self._strategies.get(key)

    def get_all(self) -> Dict[str, StrategyConfig]:
        return dict(self._strategies)

    def list(self) -> List[Dict[str, str]]:
        return [
            {"key": key, "name": strategy.name, "description": strategy.description}
            for key, strategy in self._strategies.items()
        ]

    def __contains__(self, key: str) -> bool:
        return key in self._strategies


def create_default_registry() -> StrategyRegistry:
    """Registry with the built-in strategies registered."""
    from .implementations.grid import GridStrategyConfig

    registry = StrategyRegistry()
    registry.register("grid", GridStrategyConfig())
    return registry
