"""
External collaborator interfaces and helpers.

Main Components:
- gateway: strategy execution gateway interface and envelope helpers
- blockchain: transaction submission (approval / deployment phases)
- token_validation: per-slot, last-request-wins token checks
"""

from .blockchain import (
    RpcTransactionSubmitter,
    TransactionSubmitter,
    send_approval_transaction,
    send_blockchain_transaction,
    send_deployment_transaction,
)
from .gateway import (
    Approval,
    DeploymentTransactionArgs,
    GatewayErrorInfo,
    GatewayResult,
    StrategyGateway,
    get_composed_rainlang,
    handle_gui_initialization,
    load_deployment_details,
    load_strategy_details,
    prepare_deployment_transaction,
)
from .token_validation import TokenValidationResult, TokenValidator

__all__ = [
    "RpcTransactionSubmitter",
    "TransactionSubmitter",
    "send_approval_transaction",
    "send_blockchain_transaction",
    "send_deployment_transaction",
    "Approval",
    "DeploymentTransactionArgs",
    "GatewayErrorInfo",
    "GatewayResult",
    "StrategyGateway",
    "get_composed_rainlang",
    "handle_gui_initialization",
    "load_deployment_details",
    "load_strategy_details",
    "prepare_deployment_transaction",
    "TokenValidationResult",
    "TokenValidator",
]
