class DataStoreError(Exception):
    """Base exception for data store failures."""


class PermitNotFoundError(DataStoreError):
    """Raised when a permit-type code has no catalog row."""


class BusinessNotFoundError(DataStoreError):
    """Raised when a business id does not exist."""
