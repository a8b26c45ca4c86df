class ChainError(Exception):
    """Base exception for all blockchain-related errors."""


class RpcError(ChainError):
    """Raised when the JSON-RPC endpoint fails or returns an error object."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class MintError(ChainError):
    """Raised when the mint transaction is rejected or lands with an error."""


class ConfirmationTimeoutError(ChainError):
    """Raised when confirmation is not observed within the validity window."""
