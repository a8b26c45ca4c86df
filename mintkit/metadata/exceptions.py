class InvalidMetadataError(Exception):
    """Raised when a metadata document misses required fields or breaks its invariants."""
