"""
Wallet session store.

Tracks the connected account and refreshes balance / ENS name through a
``WalletProvider``. Balance and ENS lookups settle independently: one
failing never blocks the other or the connection itself.
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from helpers.formatting import get_network_names_by_chain_id
from helpers.unified_logger import get_service_logger

from .base import Store


class WalletProvider(ABC):
    """Wallet session provider (account, balance, ENS)."""

    @abstractmethod
    async def get_account(self) -> Dict[str, Any]:
        """``{is_connected, address, chain_id}`` for the current session."""

    @abstractmethod
    async def get_balance(self, address: str) -> Any: ...

    @abstractmethod
    async def get_ens_name(self, address: str) -> Optional[str]: ...


@dataclass(frozen=True)
class WalletState:
    is_connected: bool = False
    address: Optional[str] = None
    chain_id: Optional[int] = None
    is_connecting: bool = False
    error: Optional[str] = None
    balance: Optional[Any] = None
    ens_name: Optional[str] = None
    network_name: Optional[str] = None


def _network_name(chain_id: int) -> str:
    return str(get_network_names_by_chain_id(chain_id))


class WalletStore(Store[WalletState]):

    def __init__(self, provider: Optional[WalletProvider] = None):
        super().__init__(WalletState())
        self.provider = provider
        self.logger = get_service_logger("wallet")

    async def _account_details(self, address: str):
        if self.provider is None:
            return None, None
        balance, ens_name = await asyncio.gather(
            self.provider.get_balance(address),
            self.provider.get_ens_name(address),
            return_exceptions=True,
        )
        if isinstance(balance, Exception):
            self.logger.warning(f"Balance lookup failed for {address}: {balance}")
            balance = None
        if isinstance(ens_name, Exception):
            self.logger.debug(f"ENS lookup failed for {address}: {ens_name}")
            ens_name = None
        return balance, ens_name

    async def initialize(self) -> None:
        """Adopt an existing provider connection, if any."""
        if self.provider is None:
            return
        try:
            account = await self.provider.get_account()
        except Exception as e:
            self.logger.error(f"Failed to initialize wallet state: {e}")
            self.set_error(str(e) or "Initialization failed")
            return
        if account.get("is_connected") and account.get("address"):
            await self.set_connected(account["address"], account.get("chain_id") or 1)

    async def set_connected(self, address: str, chain_id: int) -> None:
        balance, ens_name = await self._account_details(address)
        self._update(
            is_connected=True,
            address=address,
            chain_id=chain_id,
            is_connecting=False,
            error=None,
            balance=balance,
            ens_name=ens_name,
            network_name=_network_name(chain_id),
        )
        self.logger.info(f"Wallet connected: {address} on chain {chain_id}")

    def set_disconnected(self) -> None:
        self._set(WalletState())
        self.logger.info("Wallet disconnected")

    def set_connecting(self, is_connecting: bool) -> None:
        self._update(
            is_connecting=is_connecting,
            error=None if is_connecting else self.state.error,
        )

    def set_error(self, error: str) -> None:
        self._update(error=error, is_connecting=False)

    def set_chain_id(self, chain_id: int) -> None:
        self._update(chain_id=chain_id, network_name=_network_name(chain_id))

    def set_balance(self, balance: Any) -> None:
        self._update(balance=balance)

    def clear_error(self) -> None:
        self._update(error=None)

    async def refresh(self) -> None:
        """Re-fetch balance and ENS for the connected account."""
        state = self.state
        if state.is_connected and state.address and state.chain_id:
            await self.set_connected(state.address, state.chain_id)
