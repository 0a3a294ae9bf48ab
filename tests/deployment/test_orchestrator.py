import asyncio
from unittest.mock import AsyncMock

import pytest

from deployment.exceptions import ChainMismatchError, DeploymentInProgressError
from deployment.orchestrator import DeploymentOrchestrator, check_chain
from services.gateway import GatewayResult
from stores.deployment import DeploymentStep

from conftest import ORDERBOOK_ADDRESS, WALLET_ADDRESS, RecordingSubmitter, make_gateway, make_transaction_args

EXPLORER = "https://v2.raindex.finance/orders"


def _orchestrator(submitter):
    return DeploymentOrchestrator(submitter, explorer_base_url=EXPLORER)


@pytest.mark.asyncio
async def test_zero_approvals_deploys_once(submitter):
    orchestrator = _orchestrator(submitter)
    gateway = make_gateway()

    state = await orchestrator.start_deployment(gateway, WALLET_ADDRESS, 14, "flare")

    assert submitter.calls == [("0xdeploy", ORDERBOOK_ADDRESS)]
    assert state.current_step == DeploymentStep.SUCCESS
    assert state.is_deploying is False
    assert state.transaction_hash == "0xhash1"
    assert state.explorer_url == f"{EXPLORER}/flare-{ORDERBOOK_ADDRESS}"
    assert state.error is None


@pytest.mark.asyncio
async def test_approvals_submitted_in_order_before_deployment(submitter):
    orchestrator = _orchestrator(submitter)
    gateway = make_gateway(
        transaction_args=make_transaction_args(approvals=[("0xtokenA", "0xapproveA"), ("0xtokenB", "0xapproveB")])
    )

    state = await orchestrator.start_deployment(gateway, WALLET_ADDRESS, 14, "flare")

    assert submitter.calls == [
        ("0xapproveA", "0xtokenA"),
        ("0xapproveB", "0xtokenB"),
        ("0xdeploy", ORDERBOOK_ADDRESS),
    ]
    assert state.current_step == DeploymentStep.SUCCESS
    assert state.transaction_hash == "0xhash3"


@pytest.mark.asyncio
async def test_first_approval_failure_aborts_everything():
    submitter = RecordingSubmitter(failures={"0xtokenA": RuntimeError("User rejected the request")})
    orchestrator = _orchestrator(submitter)
    gateway = make_gateway(
        transaction_args=make_transaction_args(approvals=[("0xtokenA", "0xapproveA"), ("0xtokenB", "0xapproveB")])
    )

    state = await orchestrator.start_deployment(gateway, WALLET_ADDRESS, 14, "flare")

    assert submitter.calls == [("0xapproveA", "0xtokenA")]
    assert state.current_step == DeploymentStep.ERROR
    assert state.error == "Approval failed: User rejected the request"
    assert state.is_deploying is False
    assert state.transaction_hash is None


@pytest.mark.asyncio
async def test_chain_mismatch_submits_nothing(submitter):
    orchestrator = _orchestrator(submitter)
    gateway = make_gateway(transaction_args=make_transaction_args(chain_id=14))

    state = await orchestrator.start_deployment(gateway, WALLET_ADDRESS, 1, "flare")

    assert submitter.calls == []
    assert state.current_step == DeploymentStep.ERROR
    assert "14" in state.error
    assert "Flare" in state.error


@pytest.mark.asyncio
async def test_deployment_failure_message(submitter):
    submitter.failures[ORDERBOOK_ADDRESS] = RuntimeError("execution reverted")
    orchestrator = _orchestrator(submitter)

    state = await orchestrator.start_deployment(make_gateway(), WALLET_ADDRESS, 14, "flare")

    assert state.current_step == DeploymentStep.ERROR
    assert state.error == "Deployment failed: execution reverted"


@pytest.mark.asyncio
async def test_gateway_error_surfaces_verbatim(submitter):
    orchestrator = _orchestrator(submitter)
    gateway = make_gateway()
    gateway.get_deployment_transaction_args = AsyncMock(
        return_value=GatewayResult.fail("Insufficient allowance data")
    )

    state = await orchestrator.start_deployment(gateway, WALLET_ADDRESS, 14, "flare")

    assert submitter.calls == []
    assert state.error == "Insufficient allowance data"


@pytest.mark.asyncio
async def test_steps_observed_in_order(submitter):
    orchestrator = _orchestrator(submitter)
    steps = []
    orchestrator.store.subscribe(lambda state: steps.append(state.current_step))

    await orchestrator.start_deployment(make_gateway(), WALLET_ADDRESS, 14, "flare")

    assert steps == [DeploymentStep.APPROVING, DeploymentStep.DEPLOYING, DeploymentStep.SUCCESS]


@pytest.mark.asyncio
async def test_retry_after_error(submitter):
    submitter.failures[ORDERBOOK_ADDRESS] = RuntimeError("nonce too low")
    orchestrator = _orchestrator(submitter)
    gateway = make_gateway()

    first = await orchestrator.start_deployment(gateway, WALLET_ADDRESS, 14, "flare")
    submitter.failures.clear()
    second = await orchestrator.start_deployment(gateway, WALLET_ADDRESS, 14, "flare")

    assert first.current_step == DeploymentStep.ERROR
    assert second.current_step == DeploymentStep.SUCCESS
    assert second.error is None


@pytest.mark.asyncio
async def test_new_attempt_drops_previous_success_details(submitter):
    orchestrator = _orchestrator(submitter)
    gateway = make_gateway()

    first = await orchestrator.start_deployment(gateway, WALLET_ADDRESS, 14, "flare")
    submitter.failures[ORDERBOOK_ADDRESS] = RuntimeError("reverted")
    second = await orchestrator.start_deployment(gateway, WALLET_ADDRESS, 14, "flare")

    assert first.transaction_hash == "0xhash1"
    assert second.current_step == DeploymentStep.ERROR
    assert second.error == "Deployment failed: reverted"
    assert second.transaction_hash is None
    assert second.explorer_url is None


@pytest.mark.asyncio
async def test_concurrent_start_rejected(submitter):
    orchestrator = _orchestrator(submitter)
    release = asyncio.Event()
    gateway = make_gateway()
    original = gateway.get_deployment_transaction_args.return_value

    async def slow_args(address):
        await release.wait()
        return original

    gateway.get_deployment_transaction_args = AsyncMock(side_effect=slow_args)

    running = asyncio.create_task(orchestrator.start_deployment(gateway, WALLET_ADDRESS, 14, "flare"))
    await asyncio.sleep(0)

    with pytest.raises(DeploymentInProgressError):
        await orchestrator.start_deployment(gateway, WALLET_ADDRESS, 14, "flare")

    release.set()
    assert (await running).current_step == DeploymentStep.SUCCESS


@pytest.mark.asyncio
async def test_success_hooks_run_and_clear_success(submitter):
    orchestrator = _orchestrator(submitter)
    hook_states = []
    orchestrator.on_success(hook_states.append)

    await orchestrator.start_deployment(make_gateway(), WALLET_ADDRESS, 14, "flare")

    assert [state.current_step for state in hook_states] == [DeploymentStep.SUCCESS]
    assert orchestrator.state.transaction_hash == "0xhash1"

    orchestrator.clear_success()
    assert orchestrator.state.current_step == DeploymentStep.IDLE
    assert orchestrator.state.transaction_hash is None


def test_check_chain_unknown_network():
    with pytest.raises(ChainMismatchError) as exc_info:
        check_chain(424242, 1)

    assert exc_info.value.required_chain_id == 424242
    assert "chain ID 424242" in str(exc_info.value)
