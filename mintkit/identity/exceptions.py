class IdentityLoadError(Exception):
    """Raised when a signing keypair cannot be loaded or written."""
