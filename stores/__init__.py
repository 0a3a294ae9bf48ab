"""
Reactive session stores.

Main Components:
- strategy: field values, deposits, vault ids (sole writer of field values)
- wallet: connected account, chain id, balance
- gui: gateway instance and the configuration it exposes
- deployment: deployment state machine state
- validation: field/form errors and derived submit-readiness
"""

from .base import Store
from .deployment import DeploymentState, DeploymentStep, DeploymentStore
from .gui import GuiState, GuiStore
from .strategy import StrategyState, StrategyStore
from .validation import (
    FALLBACK_REQUIRED_FIELDS,
    FieldStatus,
    FormStatus,
    SubmitReadiness,
    ValidationAggregator,
    ValidationState,
    ValidationStore,
)
from .wallet import WalletProvider, WalletState, WalletStore

__all__ = [
    "Store",
    "DeploymentState",
    "DeploymentStep",
    "DeploymentStore",
    "GuiState",
    "GuiStore",
    "StrategyState",
    "StrategyStore",
    "FALLBACK_REQUIRED_FIELDS",
    "FieldStatus",
    "FormStatus",
    "SubmitReadiness",
    "ValidationAggregator",
    "ValidationState",
    "ValidationStore",
    "WalletProvider",
    "WalletState",
    "WalletStore",
]
