"""Custom exceptions for strategy deployment."""


class GridDeployerError(Exception):
    """Base class for deployer errors."""


class ConfigurationError(GridDeployerError, ValueError):
    """Raised when strategy metadata is invalid."""


class GatewayError(GridDeployerError):
    """Raised when the strategy gateway returns an error envelope."""


class ChainMismatchError(GridDeployerError):
    """Raised before any transaction when the wallet is on the wrong chain."""

    def __init__(self, required_chain_id: int, wallet_chain_id, message: str):
        super().__init__(message)
        self.required_chain_id = required_chain_id
        self.wallet_chain_id = wallet_chain_id


class TransactionError(GridDeployerError):
    """Raised when signing or broadcasting a transaction fails."""


class ApprovalError(TransactionError):
    """Raised when a token approval transaction fails."""


class DeploymentTransactionError(TransactionError):
    """Raised when the deployment transaction fails."""


class DeploymentInProgressError(GridDeployerError):
    """Raised when a deployment is started while another is running."""
