"""
Deployment Orchestrator

State machine driving one deployment attempt:

    idle -> approving -> deploying -> success
              |             |
              +---> error <-+

Preconditions (can_submit, wallet and gateway available) are checked by
the caller before ``start_deployment``. The orchestrator is the only writer
of the deployment store.
"""

from typing import Callable, List, Optional

from helpers.formatting import create_explorer_url, get_network_names_by_chain_id
from helpers.unified_logger import get_deployment_logger, log_stage
from services.blockchain import (
    TransactionSubmitter,
    send_approval_transaction,
    send_deployment_transaction,
)
from services.gateway import DeploymentTransactionArgs, StrategyGateway, prepare_deployment_transaction
from stores.deployment import DeploymentState, DeploymentStep, DeploymentStore

from .exceptions import ChainMismatchError, DeploymentInProgressError

DEPLOYMENT_FALLBACK_MESSAGE = "Deployment failed"

SuccessHook = Callable[[DeploymentState], None]


def check_chain(required_chain_id: int, wallet_chain_id: Optional[int]) -> None:
    """Raise ChainMismatchError unless the wallet is on ``required_chain_id``."""
    if wallet_chain_id == required_chain_id:
        return
    network = get_network_names_by_chain_id(required_chain_id)
    if isinstance(network, str):
        label = f"{network} (chain ID {required_chain_id})"
    else:
        label = f"chain ID {required_chain_id}"
    raise ChainMismatchError(
        required_chain_id,
        wallet_chain_id,
        f"Please switch your wallet to {label} to deploy this strategy",
    )


class DeploymentOrchestrator:
    """Sequences approvals, then the deployment transaction."""

    def __init__(
        self,
        submitter: TransactionSubmitter,
        store: Optional[DeploymentStore] = None,
        explorer_base_url: Optional[str] = None,
    ):
        self.submitter = submitter
        self.store = store or DeploymentStore()
        self.explorer_base_url = explorer_base_url
        self.logger = get_deployment_logger("orchestrator")
        self._success_hooks: List[SuccessHook] = []

    @property
    def state(self) -> DeploymentState:
        return self.store.state

    def on_success(self, hook: SuccessHook) -> None:
        """Register a hook run after a successful deployment (e.g. form reset)."""
        self._success_hooks.append(hook)

    async def start_deployment(
        self,
        gui: StrategyGateway,
        wallet_address: str,
        wallet_chain_id: Optional[int],
        network_key: str,
    ) -> DeploymentState:
        """
        Run one deployment attempt to a terminal state.

        Never raises for deployment failures; they end in the ``error`` step
        with a readable message. Retry by calling again.

        Raises:
            DeploymentInProgressError: If another attempt is still running
        """
        if self.state.is_deploying:
            raise DeploymentInProgressError("A deployment is already in progress")

        logger = self.logger.with_context(network=network_key)
        log_stage(logger, "Strategy Deployment", icon="🚀")
        self.store.start_deployment()

        try:
            args: DeploymentTransactionArgs = await prepare_deployment_transaction(gui, wallet_address)
            check_chain(args.chain_id, wallet_chain_id)

            for index, approval in enumerate(args.approvals, start=1):
                logger.info(f"Approval {index}/{len(args.approvals)} for token {approval.token}")
                await send_approval_transaction(self.submitter, approval.token, approval.calldata)

            self.store.set_step(DeploymentStep.DEPLOYING)
            logger.info(f"Submitting deployment to order book {args.orderbook_address}")
            tx_hash = await send_deployment_transaction(
                self.submitter, args.orderbook_address, args.deployment_calldata
            )
        except ChainMismatchError as e:
            logger.warning(f"Chain mismatch: wallet on {e.wallet_chain_id}, need {e.required_chain_id}")
            self.store.set_error(str(e))
            return self.state
        except Exception as e:
            logger.error(f"Deployment failed during {self.state.current_step.value}: {e}")
            self.store.set_error(str(e) or DEPLOYMENT_FALLBACK_MESSAGE)
            return self.state

        explorer_url = create_explorer_url(network_key, args.orderbook_address, self.explorer_base_url)
        self.store.set_success(tx_hash, explorer_url)
        logger.info(f"Deployment succeeded: {tx_hash} ({explorer_url})")

        for hook in self._success_hooks:
            hook(self.state)
        return self.state

    def clear_success(self) -> None:
        """Drop the success banner (or a stale error) and return to idle."""
        if not self.state.is_deploying:
            self.store.clear_success()

    def reset(self) -> None:
        self.store.reset()
