"""
Deployment package.

Modules:
- exceptions: error taxonomy shared by services and the orchestrator
- orchestrator: approval -> deployment state machine
- session: wires stores, validation and the orchestrator for one user session
"""

from .exceptions import (
    ApprovalError,
    ChainMismatchError,
    ConfigurationError,
    DeploymentInProgressError,
    DeploymentTransactionError,
    GatewayError,
    GridDeployerError,
    TransactionError,
)

__all__ = [
    "ApprovalError",
    "ChainMismatchError",
    "ConfigurationError",
    "DeploymentInProgressError",
    "DeploymentTransactionError",
    "GatewayError",
    "GridDeployerError",
    "TransactionError",
]
