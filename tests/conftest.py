"""Pytest configuration and shared fakes for deployer tests."""

import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

pytest_plugins = ["pytest_asyncio"]

from services.gateway import GatewayResult  # noqa: E402
from strategies.registry import create_default_registry  # noqa: E402

WALLET_ADDRESS = "0x1111111111111111111111111111111111111111"
ORDERBOOK_ADDRESS = "0x2222222222222222222222222222222222222222"
TOKEN_A = "0x3333333333333333333333333333333333333333"
TOKEN_B = "0x4444444444444444444444444444444444444444"


def make_transaction_args(approvals=(), chain_id=14, orderbook=ORDERBOOK_ADDRESS):
    return {
        "approvals": [{"token": token, "calldata": calldata} for token, calldata in approvals],
        "deploymentCalldata": "0xdeploy",
        "orderbookAddress": orderbook,
        "chainId": chain_id,
    }


def make_gateway(transaction_args=None, select_tokens=("token1", "token2")):
    """Gateway double: every accessor is an AsyncMock returning a success envelope."""
    gateway = SimpleNamespace()
    gateway.get_strategy_details = AsyncMock(
        return_value=GatewayResult.ok({"name": "Grid", "description": "Fixed price ladder"})
    )
    gateway.get_deployment_details = AsyncMock(
        return_value=GatewayResult.ok(
            {"flare": {"name": "Flare", "description": "Flare mainnet", "chainId": 14}}
        )
    )
    gateway.choose_deployment = AsyncMock(return_value=GatewayResult.ok())
    gateway.deserialize_state = AsyncMock(return_value=GatewayResult.ok())
    gateway.serialize_state = AsyncMock(return_value=GatewayResult.ok("H4sIAAAA"))
    gateway.get_composed_rainlang = AsyncMock(return_value=GatewayResult.ok("#calculate-io ..."))
    gateway.get_deployment_transaction_args = AsyncMock(
        return_value=GatewayResult.ok(transaction_args or make_transaction_args())
    )
    gateway.get_select_tokens = AsyncMock(
        return_value=GatewayResult.ok([{"key": key, "name": key.upper()} for key in select_tokens])
    )
    gateway.set_select_token = AsyncMock(return_value=GatewayResult.ok())
    gateway.get_token_info = AsyncMock(
        return_value=GatewayResult.ok({"symbol": "WFLR", "decimals": 18})
    )
    gateway.get_all_field_definitions = AsyncMock(return_value=GatewayResult.ok([]))
    gateway.set_field_value = AsyncMock(return_value=GatewayResult.ok())
    gateway.get_deposits = AsyncMock(return_value=GatewayResult.ok([]))
    gateway.set_deposit = AsyncMock(return_value=GatewayResult.ok())
    gateway.set_vault_id = AsyncMock(return_value=GatewayResult.ok())
    return gateway


class RecordingSubmitter:
    """Transaction submitter that records calls and fails on chosen targets."""

    def __init__(self, failures=None):
        self.calls = []
        self.failures = dict(failures or {})

    async def submit(self, calldata, to_address):
        self.calls.append((calldata, to_address))
        if to_address in self.failures:
            raise self.failures[to_address]
        return f"0xhash{len(self.calls)}"


@pytest.fixture
def registry():
    return create_default_registry()


@pytest.fixture
def gateway():
    return make_gateway()


@pytest.fixture
def submitter():
    return RecordingSubmitter()
