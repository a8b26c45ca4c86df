import time
from collections.abc import Callable
from typing import Any

from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import Message
from solders.transaction import Transaction

from mintkit.chain.core_program import build_create_asset_instruction
from mintkit.chain.exceptions import ConfirmationTimeoutError, MintError, RpcError
from mintkit.chain.rpc_client import SolanaRpcClient
from mintkit.chain.transaction_context import (
    Clock,
    TransactionContext,
    fetch_transaction_context,
    refresh_transaction_context,
)
from mintkit.config.settings import Settings
from mintkit.identity.models import Identity
from mintkit.logging.logger import Log
from mintkit.pipeline.models import MintResult

COMMITMENT_RANK = {"processed": 0, "confirmed": 1, "finalized": 2}
LAMPORTS_PER_SOL = 1_000_000_000


def commitment_reached(status: str | None, required: str) -> bool:
    if status is None:
        return False
    return COMMITMENT_RANK.get(status, -1) >= COMMITMENT_RANK[required]


class MintSubmitter:
    """Signs, submits and confirms the create-asset transaction."""

    def __init__(
        self,
        rpc: SolanaRpcClient,
        *,
        commitment: str,
        blockhash_max_age_seconds: float,
        confirmation_timeout_seconds: float,
        poll_interval_seconds: float,
        explorer_url: str = "",
        asset_viewer_url: str = "",
        devnet: bool = False,
        asset_factory: Callable[[], Keypair] = Keypair,
        clock: Clock = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if commitment not in COMMITMENT_RANK:
            raise ValueError(
                f"Unknown commitment '{commitment}'. Choose from: {list(COMMITMENT_RANK)}"
            )
        self._rpc = rpc
        self._commitment = commitment
        self._blockhash_max_age_seconds = blockhash_max_age_seconds
        self._confirmation_timeout_seconds = confirmation_timeout_seconds
        self._poll_interval_seconds = poll_interval_seconds
        self._explorer_url = explorer_url.rstrip("/")
        self._asset_viewer_url = asset_viewer_url.rstrip("/")
        self._devnet = devnet
        self._asset_factory = asset_factory
        self._clock = clock
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings, rpc: SolanaRpcClient) -> "MintSubmitter":
        return cls(
            rpc,
            commitment=settings.commitment,
            blockhash_max_age_seconds=settings.blockhash_max_age_seconds,
            confirmation_timeout_seconds=settings.confirmation_timeout_seconds,
            poll_interval_seconds=settings.confirmation_poll_interval_seconds,
            explorer_url=settings.explorer_url,
            asset_viewer_url=settings.asset_viewer_url,
            devnet=settings.is_devnet(),
        )

    def prepare(self, identity: Identity) -> TransactionContext:
        """Preflight before uploads: log the payer balance and capture a context.

        Raises:
            MintError: if the node cannot be reached.
        """
        try:
            lamports = self._rpc.get_balance(identity.address, self._commitment)
            context = fetch_transaction_context(self._rpc, self._commitment, self._clock)
        except RpcError as exc:
            raise MintError(f"Cannot reach the network before uploading: {exc}") from exc
        Log.info("Wallet balance", address=identity.address, sol=lamports / LAMPORTS_PER_SOL)
        if lamports == 0:
            Log.warning(f"Wallet {identity.address} has no SOL; the mint transaction will be rejected")
        return context

    def mint(
        self,
        identity: Identity,
        name: str,
        metadata_uri: str,
        context: TransactionContext | None = None,
    ) -> MintResult:
        """Create the asset and wait for the configured commitment.

        A context captured before a long upload is refreshed first.

        Raises:
            MintError: if submission is rejected or the transaction fails.
            ConfirmationTimeoutError: if confirmation is not observed in time.
        """
        try:
            context = refresh_transaction_context(
                self._rpc,
                context,
                max_age_seconds=self._blockhash_max_age_seconds,
                commitment=self._commitment,
                clock=self._clock,
            )
        except RpcError as exc:
            raise MintError(f"Cannot fetch a recent blockhash: {exc}") from exc

        asset = self._asset_factory()
        instruction = build_create_asset_instruction(
            asset=asset.pubkey(),
            payer=identity.pubkey,
            owner=identity.pubkey,
            name=name,
            uri=metadata_uri,
        )
        blockhash = Hash.from_string(context.blockhash)
        message = Message.new_with_blockhash([instruction], identity.pubkey, blockhash)
        transaction = Transaction([identity.keypair, asset], message, blockhash)
        signature = str(transaction.signatures[0])

        Log.info(f"Submitting mint of '{name}' as asset {asset.pubkey()}")
        try:
            self._rpc.send_transaction(bytes(transaction), preflight_commitment=self._commitment)
        except RpcError as exc:
            raise MintError(f"Mint transaction rejected: {exc}") from exc

        self._await_confirmation(signature, context)
        asset_address = str(asset.pubkey())
        Log.info("Mint confirmed", commitment=self._commitment, signature=signature)
        return MintResult(
            asset_address=asset_address,
            transaction_signature=signature,
            explorer_url=self._explorer_link(signature),
            asset_viewer_url=self._asset_viewer_link(asset_address),
        )

    def _await_confirmation(self, signature: str, context: TransactionContext) -> None:
        deadline = self._clock() + self._confirmation_timeout_seconds
        while True:
            status = self._fetch_status(signature)
            if status is not None:
                if status.get("err") is not None:
                    raise MintError(f"Transaction {signature} failed: {status['err']}")
                if commitment_reached(status.get("confirmationStatus"), self._commitment):
                    return
            if self._clock() >= deadline:
                raise ConfirmationTimeoutError(
                    f"Transaction {signature} not {self._commitment} after "
                    f"{self._confirmation_timeout_seconds}s"
                )
            if status is None and self._block_height() > context.last_valid_block_height:
                raise ConfirmationTimeoutError(
                    f"Blockhash of transaction {signature} expired before confirmation"
                )
            self._sleep(self._poll_interval_seconds)

    def _fetch_status(self, signature: str) -> dict[str, Any] | None:
        try:
            return self._rpc.get_signature_statuses([signature])[0]
        except RpcError as exc:
            raise MintError(f"Cannot read status of {signature}: {exc}") from exc

    def _block_height(self) -> int:
        try:
            return self._rpc.get_block_height(self._commitment)
        except RpcError as exc:
            raise MintError(f"Cannot read block height: {exc}") from exc

    def _explorer_link(self, signature: str) -> str:
        if not self._explorer_url:
            return ""
        suffix = "?cluster=devnet" if self._devnet else ""
        return f"{self._explorer_url}/tx/{signature}{suffix}"

    def _asset_viewer_link(self, asset_address: str) -> str:
        if not self._asset_viewer_url:
            return ""
        suffix = "?env=devnet" if self._devnet else ""
        return f"{self._asset_viewer_url}/{asset_address}{suffix}"
