import time
from collections.abc import Callable
from dataclasses import dataclass

from mintkit.chain.rpc_client import SolanaRpcClient
from mintkit.logging.logger import Log

Clock = Callable[[], float]


@dataclass(frozen=True)
class TransactionContext:
    """Time-sensitive submission parameters captured from the network."""

    blockhash: str
    last_valid_block_height: int
    fetched_at: float

    def age(self, clock: Clock = time.monotonic) -> float:
        return clock() - self.fetched_at


def fetch_transaction_context(
    rpc: SolanaRpcClient,
    commitment: str,
    clock: Clock = time.monotonic,
) -> TransactionContext:
    blockhash, last_valid_block_height = rpc.get_latest_blockhash(commitment)
    Log.debug(f"Fetched blockhash {blockhash} valid until block {last_valid_block_height}")
    return TransactionContext(
        blockhash=blockhash,
        last_valid_block_height=last_valid_block_height,
        fetched_at=clock(),
    )


def refresh_transaction_context(
    rpc: SolanaRpcClient,
    context: TransactionContext | None,
    *,
    max_age_seconds: float,
    commitment: str,
    clock: Clock = time.monotonic,
) -> TransactionContext:
    """Return a context whose blockhash is still inside its validity window.

    Uploads of large files can outlive a blockhash; a context older than
    max_age_seconds is re-fetched instead of reused.
    """
    if context is not None and context.age(clock) < max_age_seconds:
        return context
    if context is not None:
        Log.info(
            f"Blockhash is {context.age(clock):.0f}s old, fetching a fresh one before submitting"
        )
    return fetch_transaction_context(rpc, commitment, clock)
