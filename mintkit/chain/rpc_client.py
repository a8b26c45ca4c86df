import base64
import itertools
from typing import Any

import httpx

from mintkit.chain.exceptions import RpcError
from mintkit.logging.logger import Log


class SolanaRpcClient:
    """Minimal Solana JSON-RPC client over httpx."""

    def __init__(
        self,
        *,
        rpc_url: str,
        timeout_seconds: int,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._rpc_url = rpc_url
        self._ids = itertools.count(1)
        self._client = httpx.Client(timeout=timeout_seconds, transport=transport)

    def __enter__(self) -> "SolanaRpcClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get_latest_blockhash(self, commitment: str) -> tuple[str, int]:
        """Return (blockhash, last_valid_block_height)."""
        result = self._call("getLatestBlockhash", [{"commitment": commitment}])
        value = result["value"]
        return value["blockhash"], int(value["lastValidBlockHeight"])

    def get_block_height(self, commitment: str) -> int:
        return int(self._call("getBlockHeight", [{"commitment": commitment}]))

    def get_balance(self, address: str, commitment: str = "confirmed") -> int:
        """Balance in lamports."""
        result = self._call("getBalance", [address, {"commitment": commitment}])
        return int(result["value"])

    def send_transaction(self, raw_transaction: bytes, preflight_commitment: str = "confirmed") -> str:
        """Submit a signed transaction and return its signature."""
        encoded = base64.b64encode(raw_transaction).decode("ascii")
        return self._call(
            "sendTransaction",
            [encoded, {"encoding": "base64", "preflightCommitment": preflight_commitment}],
        )

    def get_signature_statuses(self, signatures: list[str]) -> list[dict[str, Any] | None]:
        result = self._call(
            "getSignatureStatuses",
            [signatures, {"searchTransactionHistory": False}],
        )
        return list(result["value"])

    def _call(self, method: str, params: list[Any]) -> Any:
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        try:
            response = self._client.post(self._rpc_url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            raise RpcError(
                f"{method} failed with HTTP {exc.response.status_code}",
                code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise RpcError(f"{method} failed: {exc}") from exc
        except ValueError as exc:
            raise RpcError(f"{method} returned invalid JSON") from exc

        if "error" in data:
            error = data["error"] or {}
            Log.debug(f"RPC {method} error: {error}")
            raise RpcError(
                f"{method} error: {error.get('message', error)}",
                code=error.get("code"),
            )
        if "result" not in data:
            raise RpcError(f"{method} returned no result")
        return data["result"]
