from unittest.mock import AsyncMock

import pytest

from stores.deployment import DeploymentStep, DeploymentStore
from stores.strategy import StrategyStore
from stores.wallet import WalletStore

VALID = {"baseline-io-ratio": "0.5", "io-ratio-growth": "0.1", "tranche-size": "100"}


def test_field_edit_recomputes_max_returns(registry):
    store = StrategyStore(registry)

    store.set_field_values(VALID)
    assert store.state.max_returns == pytest.approx(796.87, abs=0.01)
    assert len(store.grid_levels) == 5

    store.set_field_value("io-ratio-growth", "0")
    assert store.state.max_returns == 0
    assert store.grid_levels == []


def test_unknown_strategy_is_rejected(registry):
    store = StrategyStore(registry)
    store.set_field_values(VALID)

    assert store.set_strategy("dca") is False
    assert store.state.field_values == VALID


def test_reset_restores_defaults(registry):
    store = StrategyStore(registry, default_deployment="base")
    store.set_field_values(VALID)
    store.set_deposit("token1", "10")
    store.set_vault_id(True, "token1", "42")
    store.set_selected_deployment("flare")
    store.toggle_advanced_options()

    store.reset()

    assert store.state.field_values == {}
    assert store.state.deposits == {}
    assert store.state.vault_ids == {"input": {}, "output": {}}
    assert store.state.selected_deployment == "base"
    assert store.state.show_advanced_options is False


def test_vault_ids_split_by_side(registry):
    store = StrategyStore(registry)

    store.set_vault_id(True, "token1", "1")
    store.set_vault_id(False, "token2", "2")

    assert store.state.vault_ids == {"input": {"token1": "1"}, "output": {"token2": "2"}}


def test_subscribers_notified_in_order(registry):
    store = StrategyStore(registry)
    seen = []
    unsubscribe = store.subscribe(lambda state: seen.append(state.max_returns))

    store.set_field_values(VALID)
    unsubscribe()
    store.set_field_value("tranche-size", "")

    assert len(seen) == 1


def test_deployment_store_transitions():
    store = DeploymentStore()

    store.start_deployment()
    assert store.state.is_deploying is True
    assert store.state.current_step == DeploymentStep.APPROVING

    store.set_success("0xabc", "https://explorer/flare-0x1")
    assert store.state.is_deploying is False
    assert store.state.current_step == DeploymentStep.SUCCESS

    store.clear_success()
    assert store.state.current_step == DeploymentStep.IDLE
    assert store.state.transaction_hash is None
    assert store.state.explorer_url is None


@pytest.mark.asyncio
async def test_wallet_balance_and_ens_settle_independently():
    provider = AsyncMock()
    provider.get_balance.return_value = {"formatted": "1.5", "symbol": "FLR"}
    provider.get_ens_name.side_effect = RuntimeError("no reverse record")
    wallet = WalletStore(provider)

    await wallet.set_connected("0xabc", 14)

    assert wallet.state.is_connected is True
    assert wallet.state.balance == {"formatted": "1.5", "symbol": "FLR"}
    assert wallet.state.ens_name is None
    assert wallet.state.network_name == "Flare"


@pytest.mark.asyncio
async def test_wallet_initialize_adopts_existing_connection():
    provider = AsyncMock()
    provider.get_account.return_value = {"is_connected": True, "address": "0xabc", "chain_id": 8453}
    provider.get_balance.return_value = None
    provider.get_ens_name.return_value = "alice.eth"
    wallet = WalletStore(provider)

    await wallet.initialize()

    assert wallet.state.chain_id == 8453
    assert wallet.state.ens_name == "alice.eth"


@pytest.mark.asyncio
async def test_wallet_initialize_records_error():
    provider = AsyncMock()
    provider.get_account.side_effect = RuntimeError("provider offline")
    wallet = WalletStore(provider)

    await wallet.initialize()

    assert wallet.state.is_connected is False
    assert wallet.state.error == "provider offline"


def test_wallet_chain_change_updates_network_name():
    wallet = WalletStore()

    wallet.set_chain_id(137)
    assert wallet.state.network_name == "Polygon"

    wallet.set_chain_id(999)
    assert wallet.state.network_name == "999"
