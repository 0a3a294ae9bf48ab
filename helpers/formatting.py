"""
Display and lookup helpers for networks, addresses and balances.
"""

import re
from typing import Optional, Union

from deploy_config.constants import (
    EXPLORER_NAMES,
    NETWORK_NAMES,
    NETWORK_NAMES_BY_CHAIN_ID,
    NETWORKS,
    NetworkConfig,
)
from helpers.numbers import parse_finite_number

_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")


def get_network_name(network_key: str) -> str:
    """Human-readable network name, falling back to the key itself."""
    return NETWORK_NAMES.get(network_key, network_key)


def get_network_names_by_chain_id(chain_id: int) -> Union[str, int]:
    return NETWORK_NAMES_BY_CHAIN_ID.get(chain_id, chain_id)


def get_explorer_name(chain_id: int) -> str:
    return EXPLORER_NAMES.get(chain_id, "Explorer")


def get_network_config(network_key: str) -> Optional[NetworkConfig]:
    return NETWORKS.get(network_key)


def format_address(address: str) -> str:
    """Shorten an address to its first 6 and last 4 characters."""
    if not address or len(address) < 10:
        return address
    return f"{address[:6]}...{address[-4:]}"


def format_number(value: float, decimals: int = 2) -> str:
    return f"{value:.{decimals}f}"


def _trim_fraction(formatted: str) -> str:
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")
    return formatted


def format_balance(formatted: str, max_decimals: int = 4) -> str:
    """
    Format a balance string for display.

    Tiny amounts use scientific notation, amounts below one keep up to six
    decimals, large amounts are grouped with at most two decimals.
    Non-numeric input is returned unchanged.
    """
    num = parse_finite_number(formatted)
    if num is None:
        return formatted

    if 0 < num < 0.0001:
        return f"{num:.2e}"

    if num < 1:
        return f"{num:.{min(max_decimals, 6)}f}"

    if num >= 1000:
        return _trim_fraction(f"{num:,.2f}")

    return _trim_fraction(f"{num:,.{max_decimals}f}")


def is_valid_address(address: str) -> bool:
    """
    Check an EVM address: 0x-prefixed, 40 hex characters, not all zeros, not all f's.
    """
    if not address or not isinstance(address, str):
        return False

    if not _ADDRESS_RE.match(address):
        return False

    body = address[2:].lower()
    if body == "0" * 40 or body == "f" * 40:
        return False

    return True


def create_explorer_url(network_key: str, orderbook_address: str, base_url: Optional[str] = None) -> str:
    """Explorer URL for a deployed strategy: ``{base}/{network}-{orderbook}``."""
    if base_url is None:
        from deploy_config.settings import get_settings

        base_url = get_settings().explorer_base_url
    return f"{base_url.rstrip('/')}/{network_key}-{orderbook_address}"
