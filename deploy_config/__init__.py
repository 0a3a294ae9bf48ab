"""
Deployer configuration.

Main Components:
- settings: environment-driven runtime settings (pydantic-settings)
- constants: token, network and explorer tables
"""

from .settings import Settings, get_settings
from .constants import (
    TOKENS,
    NETWORKS,
    NETWORK_NAMES,
    NETWORK_NAMES_BY_CHAIN_ID,
    EXPLORER_NAMES,
    DEFAULT_DEPLOYMENT,
    GRID_STRATEGY_PATH,
    Token,
    NetworkConfig,
)

__all__ = [
    "Settings",
    "get_settings",
    "TOKENS",
    "NETWORKS",
    "NETWORK_NAMES",
    "NETWORK_NAMES_BY_CHAIN_ID",
    "EXPLORER_NAMES",
    "DEFAULT_DEPLOYMENT",
    "GRID_STRATEGY_PATH",
    "Token",
    "NetworkConfig",
]
