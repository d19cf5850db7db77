"""
Processing gateway layer.

Asynchronous request/response boundary with the processing backend.
"""

from .base import ProcessingGateway
from .http_client import HttpProcessingGateway
from .factory import GatewayFactory

__all__ = [
    'ProcessingGateway',
    'HttpProcessingGateway',
    'GatewayFactory',
]
