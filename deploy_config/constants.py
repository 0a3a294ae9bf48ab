"""
Static token, network and explorer tables.
"""

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class Token:
    """Token available for trading."""
    name: str
    symbol: str
    address: str
    decimals: int


@dataclass(frozen=True)
class NetworkConfig:
    """Network configuration entry."""
    name: str
    key: str
    chain_id: int
    subgraph_url: str
    currency: str


TOKENS: List[Token] = [
    Token("Bridged USDC (Stargate)", "USDC.e", "0xfbda5f676cb37624f28265a144a48b0d6e87d3b6", 6),
    Token("Bridged USDT (Stargate)", "USDT.e", "0x0b38e83b86d491735feaa0a791f65c2b99535396", 6),
    Token("Staked FLR", "sFLR", "0x12e605bc104e93b45e1ad99f9e555f659051c2bb", 18),
    Token("Wrapped FLR", "WFLR", "0x1D80c49BbBCd1C0911346656B529DF9E5c2F783d", 18),
    Token("Wrapped Ether", "WETH", "0x1502fa4be69d526124d453619276faccab275d3d", 18),
]

NETWORKS: Dict[str, NetworkConfig] = {
    "base": NetworkConfig("Base", "base", 8453, "https://example.com/subgraph", "ETH"),
    "ethereum": NetworkConfig("Ethereum", "ethereum", 1, "https://example.com/subgraph", "ETH"),
    "bsc": NetworkConfig("BSC", "bsc", 56, "https://example.com/subgraph", "BNB"),
    "polygon": NetworkConfig("Polygon", "polygon", 137, "https://example.com/subgraph", "POL"),
    "flare": NetworkConfig("Flare", "flare", 14, "https://example.com/subgraph", "FLR"),
}

NETWORK_NAMES: Dict[str, str] = {
    "ethereum": "Ethereum",
    "base": "Base",
    "polygon": "Polygon",
    "bsc": "BSC",
    "flare": "Flare",
}

NETWORK_NAMES_BY_CHAIN_ID: Dict[int, str] = {
    1: "Ethereum",
    8453: "Base",
    137: "Polygon",
    10: "Optimism",
    42161: "Arbitrum",
    43114: "Avalanche",
    14: "Flare",
    56: "BSC",
}

EXPLORER_NAMES: Dict[int, str] = {
    1: "Etherscan",
    8453: "BaseScan",
    137: "PolygonScan",
    56: "BscScan",
    14: "FlareExplorer",
}

DEFAULT_DEPLOYMENT = "flare"

GRID_STRATEGY_PATH = (
    "https://raw.githubusercontent.com/rainlanguage/rain.strategies/"
    "9e24aef2dd972a63b35cf59d8ab91ed2a9b01c69/src/grid.rain"
)
