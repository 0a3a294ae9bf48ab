"""
Strategy store.

Sole writer of field values. Every field change recomputes the projected
return immediately; the ladder preview is derived on read.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from deploy_config.constants import DEFAULT_DEPLOYMENT
from helpers.unified_logger import get_strategy_logger
from strategies.base_strategy import GridLevel
from strategies.registry import StrategyRegistry

from .base import Store


@dataclass(frozen=True)
class StrategyState:
    strategy_key: str = "grid"
    selected_deployment: str = DEFAULT_DEPLOYMENT
    strategy_details: Optional[Dict[str, Any]] = None
    deployments: Tuple[Dict[str, Any], ...] = ()
    all_tokens_selected: bool = False
    field_values: Dict[str, str] = field(default_factory=dict)
    deposits: Dict[str, str] = field(default_factory=dict)
    vault_ids: Dict[str, Dict[str, str]] = field(
        default_factory=lambda: {"input": {}, "output": {}}
    )
    max_returns: float = 0.0
    show_advanced_options: bool = False


class StrategyStore(Store[StrategyState]):

    def __init__(
        self,
        registry: StrategyRegistry,
        strategy_key: str = "grid",
        default_deployment: str = DEFAULT_DEPLOYMENT,
    ):
        self.registry = registry
        self.default_strategy_key = strategy_key
        self.default_deployment = default_deployment
        self.logger = get_strategy_logger("store")
        super().__init__(self._initial_state())

    def _initial_state(self) -> StrategyState:
        return StrategyState(
            strategy_key=self.default_strategy_key,
            selected_deployment=self.default_deployment,
        )

    def _max_returns(self, strategy_key: str, field_values: Dict[str, str]) -> float:
        strategy = self.registry.get(strategy_key)
        if strategy is None:
            return 0.0
        return strategy.get_calculations().calculate_max_returns(field_values)

    def set_strategy(self, strategy_key: str) -> bool:
        if self.registry.get(strategy_key) is None:
            self.logger.error(f"Strategy '{strategy_key}' not found in registry")
            return False
        self._update(strategy_key=strategy_key, field_values={}, max_returns=0.0)
        return True

    def set_field_value(self, binding: str, value: str) -> None:
        self.set_field_values({binding: value})

    def set_field_values(self, values: Dict[str, str]) -> None:
        field_values = {**self.state.field_values, **values}
        max_returns = self._max_returns(self.state.strategy_key, field_values)
        self.logger.debug(f"Field values updated: {values} (max returns {max_returns})")
        self._update(field_values=field_values, max_returns=max_returns)

    def calculate_max_returns(self) -> float:
        max_returns = self._max_returns(self.state.strategy_key, self.state.field_values)
        self._update(max_returns=max_returns)
        return max_returns

    @property
    def grid_levels(self) -> List[GridLevel]:
        strategy = self.registry.get(self.state.strategy_key)
        if strategy is None:
            return []
        return strategy.get_calculations().calculate_grid_levels(self.state.field_values)

    def set_strategy_details(self, details: Dict[str, Any]) -> None:
        self._update(strategy_details=details)

    def set_deployments(self, deployments: List[Dict[str, Any]]) -> None:
        self._update(deployments=tuple(deployments))

    def set_selected_deployment(self, deployment: str) -> None:
        self._update(selected_deployment=deployment)

    def set_all_tokens_selected(self, selected: bool) -> None:
        self._update(all_tokens_selected=selected)

    def set_deposit(self, token_key: str, amount: str) -> None:
        self._update(deposits={**self.state.deposits, token_key: amount})

    def set_vault_id(self, is_input: bool, token_key: str, vault_id: str) -> None:
        side = "input" if is_input else "output"
        vault_ids = {k: dict(v) for k, v in self.state.vault_ids.items()}
        vault_ids.setdefault(side, {})[token_key] = vault_id
        self._update(vault_ids=vault_ids)

    def toggle_advanced_options(self) -> None:
        self._update(show_advanced_options=not self.state.show_advanced_options)

    def reset(self) -> None:
        self._set(self._initial_state())
