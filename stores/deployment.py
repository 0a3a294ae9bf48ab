"""
Deployment state store.

Written only by the DeploymentOrchestrator.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .base import Store


class DeploymentStep(str, Enum):
    IDLE = "idle"
    APPROVING = "approving"
    DEPLOYING = "deploying"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class DeploymentState:
    is_deploying: bool = False
    current_step: DeploymentStep = DeploymentStep.IDLE
    transaction_hash: Optional[str] = None
    explorer_url: Optional[str] = None
    error: Optional[str] = None


class DeploymentStore(Store[DeploymentState]):

    def __init__(self):
        super().__init__(DeploymentState())

    def start_deployment(self) -> None:
        self._update(
            is_deploying=True,
            current_step=DeploymentStep.APPROVING,
            transaction_hash=None,
            explorer_url=None,
            error=None,
        )

    def set_step(self, step: DeploymentStep) -> None:
        self._update(current_step=step)

    def set_success(self, transaction_hash: str, explorer_url: str) -> None:
        self._update(
            is_deploying=False,
            current_step=DeploymentStep.SUCCESS,
            transaction_hash=transaction_hash,
            explorer_url=explorer_url,
            error=None,
        )

    def set_error(self, error: str) -> None:
        self._update(is_deploying=False, current_step=DeploymentStep.ERROR, error=error)

    def clear_success(self) -> None:
        """Back to idle once the user starts a new configuration."""
        self._update(
            current_step=DeploymentStep.IDLE,
            transaction_hash=None,
            explorer_url=None,
            error=None,
        )

    def reset(self) -> None:
        self._set(DeploymentState())
