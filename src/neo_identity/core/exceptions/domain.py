"""Identity store exceptions raised at the store and entity boundaries."""

from typing import Optional

from .base import IdentityStoreError


class InvalidArgumentError(IdentityStoreError, ValueError):
    """Raised when a required argument is missing or malformed."""

    def __init__(self, argument_name: str, reason: Optional[str] = None):
        self.argument_name = argument_name
        message = reason or f"Argument '{argument_name}' is required"
        super().__init__(message, details={"argument": argument_name})


class OperationCancelledError(IdentityStoreError):
    """Raised when an operation starts with an already cancelled token."""

    def __init__(self, operation: Optional[str] = None, reason: str = "cancellation requested"):
        self.operation = operation
        message = f"Operation '{operation}' cancelled: {reason}" if operation else f"Operation cancelled: {reason}"
        super().__init__(message, details={"operation": operation, "reason": reason})


class OperationNotSupportedError(IdentityStoreError, NotImplementedError):
    """Raised by capabilities that are deliberately not backed by storage."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Operation '{operation}' is not supported by this store")


class CollectionNotLoadedError(IdentityStoreError):
    """Raised when reading a lazily loaded collection before its load step."""

    def __init__(self, collection_name: str):
        self.collection_name = collection_name
        super().__init__(f"Collection '{collection_name}' has not been loaded")
