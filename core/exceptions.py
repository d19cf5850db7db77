"""
Error taxonomy for the scan queue.

Invalid-argument errors are raised synchronously by the stores. Gateway
errors come back from the processing backend and are propagated to the
caller unchanged; the stores are never touched when one is raised.
"""
from typing import Optional


class ScanError(Exception):
    """Base class for all scan queue errors."""


class InvalidArgumentError(ScanError, ValueError):
    """A caller passed a value outside the accepted domain."""


class GatewayError(ScanError):
    """A processing backend request failed."""

    def __init__(self, operation: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.message = message
        self.status_code = status_code


class BackendError(GatewayError):
    """The backend answered, but rejected the request or sent garbage."""


class TransportError(GatewayError):
    """The backend could not be reached or dropped the connection."""
