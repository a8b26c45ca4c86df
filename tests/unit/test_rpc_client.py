import base64
import json
from typing import Any

import httpx
import pytest

from mintkit.chain.exceptions import RpcError
from mintkit.chain.rpc_client import SolanaRpcClient


def _make_client(results: dict[str, Any], calls: list[dict[str, Any]] | None = None) -> SolanaRpcClient:
    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        if calls is not None:
            calls.append(payload)
        body = results[payload["method"]]
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], **body})

    return SolanaRpcClient(
        rpc_url="https://rpc.test",
        timeout_seconds=5,
        transport=httpx.MockTransport(handler),
    )


class TestSolanaRpcClient:
    def test_get_latest_blockhash(self) -> None:
        calls: list[dict[str, Any]] = []
        client = _make_client(
            {
                "getLatestBlockhash": {
                    "result": {
                        "context": {"slot": 1},
                        "value": {"blockhash": "Hash111", "lastValidBlockHeight": 250},
                    }
                }
            },
            calls,
        )

        assert client.get_latest_blockhash("finalized") == ("Hash111", 250)
        assert calls[0]["params"] == [{"commitment": "finalized"}]
        assert calls[0]["jsonrpc"] == "2.0"

    def test_send_transaction_encodes_base64(self) -> None:
        calls: list[dict[str, Any]] = []
        client = _make_client({"sendTransaction": {"result": "Sig111"}}, calls)

        assert client.send_transaction(b"\x01\x02\x03") == "Sig111"
        encoded, options = calls[0]["params"]
        assert base64.b64decode(encoded) == b"\x01\x02\x03"
        assert options == {"encoding": "base64", "preflightCommitment": "confirmed"}

    def test_get_signature_statuses(self) -> None:
        status = {"slot": 5, "confirmations": 0, "err": None, "confirmationStatus": "confirmed"}
        client = _make_client(
            {"getSignatureStatuses": {"result": {"context": {"slot": 5}, "value": [status, None]}}}
        )

        assert client.get_signature_statuses(["a", "b"]) == [status, None]

    def test_get_block_height_and_balance(self) -> None:
        client = _make_client(
            {
                "getBlockHeight": {"result": 1234},
                "getBalance": {"result": {"context": {"slot": 1}, "value": 5_000_000}},
            }
        )

        assert client.get_block_height("confirmed") == 1234
        assert client.get_balance("Wallet111") == 5_000_000

    def test_rpc_error_object_raises(self) -> None:
        client = _make_client(
            {
                "sendTransaction": {
                    "error": {
                        "code": -32002,
                        "message": "Transaction simulation failed: insufficient funds",
                    }
                }
            }
        )

        with pytest.raises(RpcError, match="insufficient funds") as exc_info:
            client.send_transaction(b"tx")
        assert exc_info.value.code == -32002

    def test_http_status_error_raises(self) -> None:
        client = SolanaRpcClient(
            rpc_url="https://rpc.test",
            timeout_seconds=5,
            transport=httpx.MockTransport(lambda request: httpx.Response(429)),
        )

        with pytest.raises(RpcError, match="HTTP 429"):
            client.get_block_height("confirmed")

    def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = SolanaRpcClient(
            rpc_url="https://rpc.test",
            timeout_seconds=5,
            transport=httpx.MockTransport(handler),
        )

        with pytest.raises(RpcError, match="timed out"):
            client.get_block_height("confirmed")

    def test_context_manager_closes(self) -> None:
        with _make_client({"getBlockHeight": {"result": 1}}) as client:
            assert client.get_block_height("confirmed") == 1
