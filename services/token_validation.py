"""
Race-safe token validation.

Each token slot carries a monotonically increasing request stamp. A
response is applied only if its stamp is still the latest for the slot;
older responses are discarded even when they finish last. Lookups are
bounded by a timeout so a stuck gateway cannot hang the slot.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, Optional

from deployment.exceptions import GatewayError
from helpers.formatting import is_valid_address
from helpers.unified_logger import get_service_logger

from .gateway import StrategyGateway


@dataclass(frozen=True)
class TokenValidationResult:
    slot: str
    address: str
    stamp: int
    token_info: Optional[Any] = None
    error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None


class TokenValidator:
    """Validates token addresses per slot, last request wins."""

    def __init__(self, gateway: Optional[StrategyGateway] = None, timeout: float = 10.0):
        self.gateway = gateway
        self.timeout = timeout
        self.logger = get_service_logger("token_validation")

        self._stamps: Dict[str, int] = {}
        self.results: Dict[str, TokenValidationResult] = {}

    def latest_stamp(self, slot: str) -> int:
        return self._stamps.get(slot, 0)

    def _next_stamp(self, slot: str) -> int:
        stamp = self._stamps.get(slot, 0) + 1
        self._stamps[slot] = stamp
        return stamp

    def abandon(self, slot: str) -> None:
        """Discard whatever is in flight for ``slot`` and forget its last result."""
        self._next_stamp(slot)
        self.results.pop(slot, None)

    def reset(self) -> None:
        for slot in list(self._stamps):
            self._next_stamp(slot)
        self.results.clear()

    async def _lookup(self, slot: str, address: str) -> Any:
        (await self.gateway.set_select_token(slot, address)).unwrap()
        return (await self.gateway.get_token_info(slot)).unwrap()

    async def validate(self, slot: str, address: str) -> Optional[TokenValidationResult]:
        """
        Validate ``address`` for ``slot``.

        Returns:
            The applied result, or None if a newer request for the slot
            superseded this one while it was in flight.
        """
        stamp = self._next_stamp(slot)
        address = (address or "").strip()

        if not is_valid_address(address):
            result = TokenValidationResult(slot, address, stamp, error="Invalid token address")
            return self._apply(result)

        if self.gateway is None:
            result = TokenValidationResult(slot, address, stamp, error="Strategy is not initialized")
            return self._apply(result)

        try:
            token_info = await asyncio.wait_for(self._lookup(slot, address), timeout=self.timeout)
            result = TokenValidationResult(slot, address, stamp, token_info=token_info)
        except asyncio.TimeoutError:
            result = TokenValidationResult(
                slot, address, stamp, error=f"Token validation timed out after {self.timeout:g}s"
            )
        except GatewayError as e:
            result = TokenValidationResult(slot, address, stamp, error=str(e) or "Invalid token")

        return self._apply(result)

    def _apply(self, result: TokenValidationResult) -> Optional[TokenValidationResult]:
        if result.stamp != self.latest_stamp(result.slot):
            self.logger.debug(
                f"Discarding stale validation for {result.slot} "
                f"(stamp {result.stamp}, latest {self.latest_stamp(result.slot)})"
            )
            return None

        self.results[result.slot] = result
        if result.error:
            self.logger.warning(f"Token {result.slot} rejected: {result.error}")
        else:
            self.logger.info(f"Token {result.slot} validated: {result.address}")
        return result
