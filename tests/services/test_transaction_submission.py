import json

import httpx
import pytest

from deployment.exceptions import ApprovalError, DeploymentTransactionError, TransactionError
from services.blockchain import (
    RpcTransactionSubmitter,
    send_approval_transaction,
    send_blockchain_transaction,
    send_deployment_transaction,
)

from conftest import RecordingSubmitter


def _rpc_submitter(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RpcTransactionSubmitter("http://rpc.test", "0xfrom", client=client)


@pytest.mark.asyncio
async def test_rpc_submitter_sends_eth_send_transaction():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(json.loads(request.content))
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0xfeed"})

    submitter = _rpc_submitter(handler)

    tx_hash = await submitter.submit("0xdata", "0xto")

    assert tx_hash == "0xfeed"
    assert requests[0]["method"] == "eth_sendTransaction"
    assert requests[0]["params"] == [{"from": "0xfrom", "to": "0xto", "data": "0xdata"}]


@pytest.mark.asyncio
async def test_rpc_submitter_surfaces_rpc_error_message():
    def handler(request):
        return httpx.Response(
            200, json={"jsonrpc": "2.0", "id": 1, "error": {"code": 4001, "message": "User rejected the request"}}
        )

    with pytest.raises(TransactionError, match="User rejected the request"):
        await _rpc_submitter(handler).submit("0xdata", "0xto")


@pytest.mark.asyncio
async def test_rpc_submitter_http_failure():
    def handler(request):
        return httpx.Response(502, text="bad gateway")

    with pytest.raises(TransactionError, match="RPC request failed"):
        await _rpc_submitter(handler).submit("0xdata", "0xto")


@pytest.mark.asyncio
async def test_rpc_submitter_requires_hash():
    def handler(request):
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": None})

    with pytest.raises(TransactionError, match="transaction hash"):
        await _rpc_submitter(handler).submit("0xdata", "0xto")


@pytest.mark.asyncio
async def test_phase_specific_messages():
    submitter = RecordingSubmitter(failures={"0xtoken": RuntimeError("insufficient funds")})

    with pytest.raises(ApprovalError, match="^Approval failed: insufficient funds$"):
        await send_approval_transaction(submitter, "0xtoken", "0xapprove")

    submitter.failures["0xorderbook"] = RuntimeError("execution reverted")
    with pytest.raises(DeploymentTransactionError, match="^Deployment failed: execution reverted$"):
        await send_deployment_transaction(submitter, "0xorderbook", "0xdeploy")


@pytest.mark.asyncio
async def test_blank_failures_use_transaction_fallback():
    submitter = RecordingSubmitter(failures={"0xto": RuntimeError()})

    with pytest.raises(TransactionError, match="^Transaction failed$"):
        await send_blockchain_transaction(submitter, "0xdata", "0xto")

    with pytest.raises(ApprovalError, match="^Approval failed: Transaction failed$"):
        await send_approval_transaction(submitter, "0xto", "0xdata")


@pytest.mark.asyncio
async def test_successful_submission_returns_hash():
    submitter = RecordingSubmitter()

    assert await send_deployment_transaction(submitter, "0xorderbook", "0xdeploy") == "0xhash1"
    assert submitter.calls == [("0xdeploy", "0xorderbook")]


def test_rpc_submitter_from_settings():
    from deploy_config.settings import Settings

    submitter = RpcTransactionSubmitter.from_settings(
        "0xfrom", Settings(rpc_url="http://node.test", rpc_timeout_seconds=5)
    )

    assert submitter.rpc_url == "http://node.test"
    assert submitter.from_address == "0xfrom"
