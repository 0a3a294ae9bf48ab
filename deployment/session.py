"""
Deployment session.

One user's configure-and-deploy session: owns the stores, the submit
readiness aggregator and the orchestrator, and is the caller that checks
preconditions before a deployment starts.
"""

from functools import partial
from typing import Any, Callable, Dict, List, Mapping, Optional

from deploy_config.settings import Settings, get_settings
from helpers.debounce import Debouncer
from helpers.numbers import is_blank
from helpers.unified_logger import get_deployment_logger
from services.blockchain import TransactionSubmitter
from services.gateway import (
    StrategyGateway,
    get_composed_rainlang,
    handle_gui_initialization,
    load_deployment_details,
    load_strategy_details,
)
from services.token_validation import TokenValidationResult, TokenValidator
from stores.deployment import DeploymentState, DeploymentStep
from stores.gui import GuiStore
from stores.strategy import StrategyStore
from stores.validation import ValidationAggregator, ValidationStore
from stores.wallet import WalletProvider, WalletStore
from strategies.base_strategy import GridLevel, StrategyConfig
from strategies.registry import StrategyRegistry, create_default_registry
from validations.schema_builder import build_schema_for_strategy

from .exceptions import GatewayError
from .orchestrator import DeploymentOrchestrator


def _token_key(token: Any) -> str:
    if isinstance(token, Mapping):
        return token["key"]
    return getattr(token, "key")


class DeploymentSession:
    """Wires validation, stores and deployment for a single strategy session."""

    def __init__(
        self,
        gateway_factory: Callable[[], StrategyGateway],
        submitter: TransactionSubmitter,
        *,
        registry: Optional[StrategyRegistry] = None,
        wallet_provider: Optional[WalletProvider] = None,
        settings: Optional[Settings] = None,
        strategy_key: str = "grid",
    ):
        self.settings = settings or get_settings()
        self.registry = registry or create_default_registry()
        self.gateway_factory = gateway_factory
        self.logger = get_deployment_logger("session", strategy=strategy_key)

        self.strategy_store = StrategyStore(
            self.registry, strategy_key, self.settings.default_deployment
        )
        self.wallet_store = WalletStore(wallet_provider)
        self.gui_store = GuiStore()
        self.validation_store = ValidationStore()
        self.orchestrator = DeploymentOrchestrator(
            submitter, explorer_base_url=self.settings.explorer_base_url
        )
        self.readiness = ValidationAggregator(
            self.registry,
            self.strategy_store,
            self.wallet_store,
            self.validation_store,
            self.orchestrator.store,
        )
        self.token_validator = TokenValidator(timeout=self.settings.token_validation_timeout_seconds)

        self.serialized_state: Optional[str] = None
        self._select_token_keys: List[str] = []
        self._token_debouncers: Dict[str, Debouncer] = {}
        self._form_validation = Debouncer(
            self._validate_and_sync,
            delay=self.settings.form_validation_debounce_seconds,
            name="form_validation",
            logger=self.logger,
        )

        self.orchestrator.on_success(self._reset_after_success)

    # ========================================================================
    # Views
    # ========================================================================

    @property
    def gui(self) -> Optional[StrategyGateway]:
        return self.gui_store.state.gui

    @property
    def strategy(self) -> Optional[StrategyConfig]:
        return self.registry.get(self.strategy_store.state.strategy_key)

    @property
    def deployment_state(self) -> DeploymentState:
        return self.orchestrator.state

    @property
    def grid_levels(self) -> List[GridLevel]:
        return self.strategy_store.grid_levels

    @property
    def max_returns(self) -> float:
        return self.strategy_store.state.max_returns

    # ========================================================================
    # Initialization
    # ========================================================================

    def _on_gui_state_change(self, serialized: str) -> None:
        self.serialized_state = serialized

    async def initialize(
        self,
        dotrain: str,
        deployment_key: Optional[str] = None,
        state_from_url: Optional[str] = None,
    ) -> bool:
        """
        Load strategy details and set up the gateway for ``deployment_key``.

        Returns:
            True on success; on failure the gui store carries the error.
        """
        deployment_key = deployment_key or self.strategy_store.state.selected_deployment
        self.gui_store.set_loading(True)
        self.gui_store.set_error(None)

        try:
            catalog = self.gateway_factory()
            details = await load_strategy_details(catalog, dotrain)
            deployments = await load_deployment_details(catalog, dotrain)
        except Exception as e:
            self.logger.error(f"Failed to load strategy: {e}")
            self.gui_store.set_error(str(e) or "Could not load strategy")
            self.gui_store.set_loading(False)
            return False

        self.strategy_store.set_strategy_details(details)
        self.strategy_store.set_deployments(deployments)
        self.strategy_store.set_selected_deployment(deployment_key)

        gui, error = await handle_gui_initialization(
            self.gateway_factory, dotrain, deployment_key, state_from_url, self._on_gui_state_change
        )
        if error is not None:
            self.gui_store.set_error(error)
            self.gui_store.set_loading(False)
            return False

        try:
            select_tokens = (await gui.get_select_tokens()).unwrap() or []
            field_definitions = (await gui.get_all_field_definitions()).unwrap() or []
            deposits = (await gui.get_deposits()).unwrap() or []
        except GatewayError as e:
            self.logger.error(f"Failed to read strategy configuration: {e}")
            self.gui_store.set_error(str(e))
            self.gui_store.set_loading(False)
            return False

        self.gui_store.set_gui(gui)
        self.gui_store.set_network_key(deployment_key)
        self.gui_store.set_select_tokens(select_tokens)
        self.gui_store.set_field_definitions(field_definitions, field_definitions)
        self.gui_store.set_deposits(deposits)
        self.token_validator.gateway = gui
        self._select_token_keys = [_token_key(token) for token in select_tokens]
        self._refresh_tokens_selected()
        self.gui_store.set_loading(False)

        self.logger.info(
            f"Session ready on {deployment_key} with {len(self._select_token_keys)} token slot(s)"
        )
        return True

    # ========================================================================
    # Form edits
    # ========================================================================

    async def set_field_value(self, binding: str, value: str) -> Optional[bool]:
        """
        Update a field, then validate after the quiet window.

        Returns the debounced validation result, or None if validation was
        cancelled or failed.
        """
        self.strategy_store.set_field_value(binding, value)
        return await self._form_validation()

    async def set_deposit(self, token_key: str, amount: str) -> Optional[bool]:
        self.strategy_store.set_deposit(token_key, amount)
        if self.gui is not None and not is_blank(amount):
            result = await self.gui.set_deposit(token_key, amount)
            if result.error is not None:
                self.logger.warning(f"Gateway rejected deposit for {token_key}: {result.error.msg}")
        return await self._form_validation()

    async def set_vault_id(self, is_input: bool, token_key: str, vault_id: str) -> Optional[bool]:
        self.strategy_store.set_vault_id(is_input, token_key, vault_id)
        if self.gui is not None and not is_blank(vault_id):
            result = await self.gui.set_vault_id(is_input, token_key, vault_id)
            if result.error is not None:
                self.logger.warning(f"Gateway rejected vault id for {token_key}: {result.error.msg}")
        return await self._form_validation()

    def validate_now(self) -> bool:
        """
        Validate the whole form synchronously.

        Parameters go through the dynamic field schema, then the strategy's
        own form schema adds its stricter parameter bounds along with deposit
        and vault id checks.
        """
        strategy = self.strategy
        if strategy is None:
            key = self.strategy_store.state.strategy_key
            self.validation_store.set_validation(False, {"strategy": [f"Unknown strategy: {key}"]})
            return False

        self.validation_store.set_validating(True)
        state = self.strategy_store.state

        errors = build_schema_for_strategy(strategy).safe_parse(
            {"parameters": state.field_values}
        ).error_map()

        form_result = strategy.get_validation_schema().safe_parse(
            {
                "parameters": state.field_values,
                "deposits": state.deposits,
                "vaultIds": state.vault_ids,
            }
        )
        # The strategy schema only adds parameter messages the field rules did not already report.
        for path, messages in form_result.error_map().items():
            if path.split(".")[0] == "parameters" and path in errors:
                continue
            errors.setdefault(path, []).extend(messages)

        is_valid = not errors
        self.validation_store.set_validation(is_valid, errors)
        return is_valid

    async def _validate_and_sync(self) -> bool:
        is_valid = self.validate_now()

        gui = self.gui
        if gui is None:
            return is_valid

        errors = self.validation_store.state.errors
        for binding, value in self.strategy_store.state.field_values.items():
            path = f"parameters.{binding}"
            if is_blank(value) or errors.get(path):
                continue
            result = await gui.set_field_value(binding, value)
            if result.error is not None:
                self.logger.warning(f"Gateway rejected {binding}={value!r}: {result.error.msg}")
                self.validation_store.add_field_error(path, result.error.msg)

        return self.validation_store.state.is_valid

    # ========================================================================
    # Token selection
    # ========================================================================

    def _token_debouncer(self, key: str) -> Debouncer:
        debouncer = self._token_debouncers.get(key)
        if debouncer is None:
            debouncer = Debouncer(
                partial(self.token_validator.validate, key),
                delay=self.settings.token_validation_debounce_seconds,
                name=f"token_validation:{key}",
                logger=self.logger,
            )
            self._token_debouncers[key] = debouncer
        return debouncer

    def _refresh_tokens_selected(self) -> None:
        results = self.token_validator.results
        selected = all(
            key in results and results[key].is_valid for key in self._select_token_keys
        )
        self.strategy_store.set_all_tokens_selected(selected)
        self.gui_store.set_all_token_infos(
            [results[key].token_info for key in self._select_token_keys
             if key in results and results[key].is_valid]
        )

    async def select_token(self, key: str, address: str) -> Optional[TokenValidationResult]:
        """
        Choose a token for ``key``.

        Clears a lingering success banner first. Returns the applied
        validation result, or None if it was superseded or abandoned.
        """
        if self.orchestrator.state.current_step == DeploymentStep.SUCCESS:
            self.orchestrator.clear_success()

        result = await self._token_debouncer(key)(address)
        if result is not None:
            self._refresh_tokens_selected()
        return result

    def abandon_token_validation(self, key: str) -> None:
        """Drop a pending validation for ``key`` before it resolves."""
        debouncer = self._token_debouncers.get(key)
        if debouncer is not None:
            debouncer.cancel()
        self.token_validator.abandon(key)
        self._refresh_tokens_selected()

    # ========================================================================
    # Deployment
    # ========================================================================

    async def deploy(self) -> Optional[DeploymentState]:
        """
        Validate and, if the form can be submitted, run a deployment.

        Returns:
            The terminal deployment state, or None if preconditions failed
            and nothing was attempted.
        """
        if self.orchestrator.state.is_deploying:
            self.logger.warning("Deployment already in progress")
            return None

        self._form_validation.cancel()
        self.validate_now()

        if not self.readiness.can_submit:
            self.logger.warning(f"Cannot deploy: {self.readiness.form_status.message}")
            return None

        gui = self.gui
        wallet = self.wallet_store.state
        if gui is None or not wallet.address:
            self.logger.warning("Cannot deploy: wallet or strategy gateway unavailable")
            return None

        network_key = self.gui_store.state.network_key or self.strategy_store.state.selected_deployment
        return await self.orchestrator.start_deployment(gui, wallet.address, wallet.chain_id, network_key)

    def _reset_after_success(self, _state: DeploymentState) -> None:
        for debouncer in self._token_debouncers.values():
            debouncer.cancel()
        self._form_validation.cancel()
        self.token_validator.reset()
        self.strategy_store.reset()
        self.validation_store.reset()
        self._refresh_tokens_selected()

    def clear_success(self) -> None:
        self.orchestrator.clear_success()

    # ========================================================================
    # Serialization
    # ========================================================================

    async def serialize_state(self) -> str:
        """Opaque blob restorable through ``initialize(..., state_from_url=blob)``."""
        if self.gui is None:
            raise GatewayError("Strategy is not initialized")
        return (await self.gui.serialize_state()).unwrap()

    async def composed_rainlang(self) -> str:
        if self.gui is None:
            raise GatewayError("Strategy is not initialized")
        return await get_composed_rainlang(self.gui)

    def close(self) -> None:
        self._form_validation.cancel()
        for debouncer in self._token_debouncers.values():
            debouncer.cancel()
        self.readiness.close()
