"""
Transaction submission.

``TransactionSubmitter`` signs and broadcasts one transaction and returns
its hash, raising on failure. The ``send_*`` helpers wrap failures with a
phase-specific message; each phase keeps its own fallback.
"""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from deploy_config.settings import Settings, get_settings
from deployment.exceptions import ApprovalError, DeploymentTransactionError, TransactionError
from helpers.unified_logger import get_service_logger

logger = get_service_logger("blockchain")


class TransactionSubmitter(ABC):
    """Signs and broadcasts transactions."""

    @abstractmethod
    async def submit(self, calldata: str, to_address: str) -> str:
        """Submit ``calldata`` to ``to_address`` and return the transaction hash."""


class RpcTransactionSubmitter(TransactionSubmitter):
    """
    Submitter backed by a wallet JSON-RPC endpoint (``eth_sendTransaction``).

    The endpoint holds the key and signs; this class only relays requests.
    """

    def __init__(
        self,
        rpc_url: str,
        from_address: str,
        *,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.rpc_url = rpc_url
        self.from_address = from_address
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))
        self._owns_client = client is None
        self._ids = itertools.count(1)

    @classmethod
    def from_settings(cls, from_address: str, settings: Optional[Settings] = None) -> "RpcTransactionSubmitter":
        settings = settings or get_settings()
        return cls(settings.rpc_url, from_address, timeout=settings.rpc_timeout_seconds)

    async def submit(self, calldata: str, to_address: str) -> str:
        payload: Dict[str, Any] = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": "eth_sendTransaction",
            "params": [{"from": self.from_address, "to": to_address, "data": calldata}],
        }

        try:
            response = await self._client.post(self.rpc_url, json=payload)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            raise TransactionError(f"RPC request failed: {e}") from e
        except ValueError as e:
            raise TransactionError(f"Invalid RPC response: {e}") from e

        if not isinstance(body, dict):
            raise TransactionError("Invalid RPC response: expected a JSON object")

        if body.get("error"):
            error = body["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise TransactionError(message or "Transaction failed")

        tx_hash = body.get("result")
        if not isinstance(tx_hash, str) or not tx_hash:
            raise TransactionError("RPC response did not include a transaction hash")
        return tx_hash

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


async def send_blockchain_transaction(
    submitter: TransactionSubmitter, data: str, to: str
) -> str:
    try:
        return await submitter.submit(data, to)
    except Exception as e:
        logger.error(f"Transaction failed: {e}")
        raise TransactionError(str(e) or "Transaction failed") from e


async def send_approval_transaction(
    submitter: TransactionSubmitter, token_address: str, approval_calldata: str
) -> str:
    try:
        tx_hash = await send_blockchain_transaction(submitter, approval_calldata, token_address)
    except Exception as e:
        logger.error(f"Approval transaction failed: {e}")
        message = str(e)
        raise ApprovalError(f"Approval failed: {message}" if message else "Token approval failed") from e
    logger.log_transaction("approval", token_address, tx_hash, "submitted")
    return tx_hash


async def send_deployment_transaction(
    submitter: TransactionSubmitter, orderbook_address: str, deployment_calldata: str
) -> str:
    try:
        tx_hash = await send_blockchain_transaction(submitter, deployment_calldata, orderbook_address)
    except Exception as e:
        logger.error(f"Deployment transaction failed: {e}")
        message = str(e)
        raise DeploymentTransactionError(
            f"Deployment failed: {message}" if message else "Strategy deployment failed"
        ) from e
    logger.log_transaction("deployment", orderbook_address, tx_hash, "submitted")
    return tx_hash
