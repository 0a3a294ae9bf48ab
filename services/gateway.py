"""
Strategy Execution Gateway interface and helpers.

The gateway compiles a strategy source (dotrain) plus user choices into
order book call data. Every accessor returns a ``GatewayResult`` envelope
instead of raising; the helpers here unwrap envelopes and raise
``GatewayError`` with the envelope's message.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from deployment.exceptions import GatewayError
from helpers.unified_logger import get_service_logger

logger = get_service_logger("gateway")

StateChangeCallback = Callable[[str], None]


class GatewayErrorInfo(BaseModel):
    msg: str
    readable_msg: Optional[str] = Field(default=None, alias="readableMsg")

    model_config = ConfigDict(populate_by_name=True)


class GatewayResult(BaseModel):
    """``{value}`` or ``{error: {msg}}`` envelope."""

    value: Any = None
    error: Optional[GatewayErrorInfo] = None

    @classmethod
    def ok(cls, value: Any = None) -> "GatewayResult":
        return cls(value=value)

    @classmethod
    def fail(cls, msg: str) -> "GatewayResult":
        return cls(error=GatewayErrorInfo(msg=msg))

    def unwrap(self) -> Any:
        if self.error is not None:
            raise GatewayError(self.error.readable_msg or self.error.msg)
        return self.value


class Approval(BaseModel):
    """Token approval produced by the gateway; consumed in list order."""

    token: str
    calldata: str

    model_config = ConfigDict(populate_by_name=True)


class DeploymentTransactionArgs(BaseModel):
    approvals: List[Approval] = Field(default_factory=list)
    deployment_calldata: str = Field(alias="deploymentCalldata")
    orderbook_address: str = Field(alias="orderbookAddress")
    chain_id: int = Field(alias="chainId")

    model_config = ConfigDict(populate_by_name=True)


class StrategyGateway(ABC):
    """
    Interface to the strategy execution component.

    Construction may raise; every method returns a GatewayResult.
    """

    @abstractmethod
    async def get_strategy_details(self, dotrain: str) -> GatewayResult:
        """``{name, description}`` of the strategy."""

    @abstractmethod
    async def get_deployment_details(self, dotrain: str) -> GatewayResult:
        """Map of deployment key -> ``{name, description, chainId}``."""

    @abstractmethod
    async def choose_deployment(
        self, dotrain: str, deployment_key: str, on_state_change: StateChangeCallback
    ) -> GatewayResult: ...

    @abstractmethod
    async def deserialize_state(
        self, dotrain: str, serialized: str, on_state_change: StateChangeCallback
    ) -> GatewayResult: ...

    @abstractmethod
    async def serialize_state(self) -> GatewayResult: ...

    @abstractmethod
    async def get_composed_rainlang(self) -> GatewayResult: ...

    @abstractmethod
    async def get_deployment_transaction_args(self, owner: str) -> GatewayResult: ...

    @abstractmethod
    async def get_select_tokens(self) -> GatewayResult: ...

    @abstractmethod
    async def set_select_token(self, key: str, address: str) -> GatewayResult: ...

    @abstractmethod
    async def get_token_info(self, key: str) -> GatewayResult: ...

    @abstractmethod
    async def get_all_field_definitions(self) -> GatewayResult: ...

    @abstractmethod
    async def set_field_value(self, binding: str, value: str) -> GatewayResult: ...

    @abstractmethod
    async def get_deposits(self) -> GatewayResult: ...

    @abstractmethod
    async def set_deposit(self, token_key: str, amount: str) -> GatewayResult: ...

    @abstractmethod
    async def set_vault_id(self, is_input: bool, token_key: str, vault_id: str) -> GatewayResult: ...


async def handle_gui_initialization(
    gateway_factory: Callable[[], StrategyGateway],
    dotrain: str,
    deployment_key: str,
    state_from_url: Optional[str],
    on_state_change: StateChangeCallback,
) -> Tuple[Optional[StrategyGateway], Optional[str]]:
    """
    Build and initialize a gateway instance.

    Restores ``state_from_url`` when given, falling back to a fresh
    ``choose_deployment`` if it cannot be restored.

    Returns:
        (gateway, None) on success, (None, error_message) on failure
    """
    try:
        logger.info(f"Initializing gateway with deployment: {deployment_key}")
        gui = gateway_factory()

        if state_from_url:
            try:
                (await gui.deserialize_state(dotrain, state_from_url, on_state_change)).unwrap()
            except Exception as e:
                logger.warning(f"Could not restore serialized state ({e}); choosing deployment instead")
                (await gui.choose_deployment(dotrain, deployment_key, on_state_change)).unwrap()
        else:
            (await gui.choose_deployment(dotrain, deployment_key, on_state_change)).unwrap()

        return gui, None
    except Exception as e:
        logger.error(f"Gateway initialization failed: {e}")
        return None, str(e) or "Could not initialize deployment form."


async def load_strategy_details(gateway: StrategyGateway, dotrain: str) -> Dict[str, Any]:
    try:
        return (await gateway.get_strategy_details(dotrain)).unwrap()
    except GatewayError as e:
        logger.error(f"Failed to load strategy details: {e}")
        raise


async def load_deployment_details(gateway: StrategyGateway, dotrain: str) -> List[Dict[str, Any]]:
    """Deployment options as ``[{key, value}]`` in the gateway's order."""
    try:
        deployments = (await gateway.get_deployment_details(dotrain)).unwrap()
    except GatewayError as e:
        logger.error(f"Failed to load deployment details: {e}")
        raise
    return [{"key": key, "value": value} for key, value in dict(deployments).items()]


async def get_composed_rainlang(gateway: StrategyGateway) -> str:
    try:
        return (await gateway.get_composed_rainlang()).unwrap()
    except GatewayError as e:
        logger.error(f"Failed to get composed Rainlang: {e}")
        raise


async def prepare_deployment_transaction(
    gateway: StrategyGateway, address: str
) -> DeploymentTransactionArgs:
    try:
        value = (await gateway.get_deployment_transaction_args(address)).unwrap()
    except GatewayError as e:
        logger.error(f"Failed to prepare deployment transaction: {e}")
        raise
    if isinstance(value, DeploymentTransactionArgs):
        return value
    return DeploymentTransactionArgs.model_validate(value)
