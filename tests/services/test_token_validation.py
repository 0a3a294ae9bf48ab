import asyncio
from unittest.mock import AsyncMock

import pytest

from services.gateway import GatewayResult
from services.token_validation import TokenValidator

from conftest import TOKEN_A, TOKEN_B, make_gateway


@pytest.mark.asyncio
async def test_valid_token_is_applied():
    gateway = make_gateway()
    validator = TokenValidator(gateway)

    result = await validator.validate("token1", TOKEN_A)

    assert result.is_valid
    assert result.token_info == {"symbol": "WFLR", "decimals": 18}
    assert validator.results["token1"] is result
    gateway.set_select_token.assert_awaited_once_with("token1", TOKEN_A)


@pytest.mark.asyncio
@pytest.mark.parametrize("address", ["", "0x123", "0x" + "0" * 40, "not-an-address"])
async def test_malformed_address_rejected_without_gateway_call(address):
    gateway = make_gateway()
    validator = TokenValidator(gateway)

    result = await validator.validate("token1", address)

    assert result.error == "Invalid token address"
    gateway.set_select_token.assert_not_awaited()


@pytest.mark.asyncio
async def test_gateway_error_becomes_result_error():
    gateway = make_gateway()
    gateway.get_token_info = AsyncMock(return_value=GatewayResult.fail("Not an ERC20 token"))
    validator = TokenValidator(gateway)

    result = await validator.validate("token1", TOKEN_A)

    assert result.is_valid is False
    assert result.error == "Not an ERC20 token"


@pytest.mark.asyncio
async def test_latest_request_wins_even_if_older_finishes_last():
    gateway = make_gateway()
    slow_started = asyncio.Event()
    release_slow = asyncio.Event()

    async def set_select_token(key, address):
        if address == TOKEN_A:
            slow_started.set()
            await release_slow.wait()
        return GatewayResult.ok()

    async def get_token_info(key):
        return GatewayResult.ok({"address": gateway.set_select_token.await_args.args[1]})

    gateway.set_select_token = AsyncMock(side_effect=set_select_token)
    gateway.get_token_info = AsyncMock(side_effect=get_token_info)
    validator = TokenValidator(gateway)

    slow = asyncio.create_task(validator.validate("token1", TOKEN_A))
    await slow_started.wait()
    fast = await validator.validate("token1", TOKEN_B)
    release_slow.set()
    stale = await slow

    assert stale is None
    assert fast.address == TOKEN_B
    assert validator.results["token1"].address == TOKEN_B
    assert validator.latest_stamp("token1") == 2


@pytest.mark.asyncio
async def test_slots_are_independent():
    validator = TokenValidator(make_gateway())

    first = await validator.validate("token1", TOKEN_A)
    second = await validator.validate("token2", TOKEN_B)

    assert first.stamp == second.stamp == 1
    assert set(validator.results) == {"token1", "token2"}


@pytest.mark.asyncio
async def test_timeout_resolves_to_error():
    gateway = make_gateway()

    async def hang(key, address):
        await asyncio.sleep(10)

    gateway.set_select_token = AsyncMock(side_effect=hang)
    validator = TokenValidator(gateway, timeout=0.01)

    result = await validator.validate("token1", TOKEN_A)

    assert result.error == "Token validation timed out after 0.01s"


@pytest.mark.asyncio
async def test_abandon_discards_in_flight_validation():
    gateway = make_gateway()
    release = asyncio.Event()

    async def wait_for_release(key, address):
        await release.wait()
        return GatewayResult.ok()

    gateway.set_select_token = AsyncMock(side_effect=wait_for_release)
    validator = TokenValidator(gateway)

    pending = asyncio.create_task(validator.validate("token1", TOKEN_A))
    await asyncio.sleep(0)
    validator.abandon("token1")
    release.set()

    assert await pending is None
    assert "token1" not in validator.results
