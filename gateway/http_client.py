"""
HTTP processing gateway.

Talks to a processing backend exposing one JSON POST endpoint per request
shape (see GATEWAY_ENDPOINTS).
"""
import json
import logging
from typing import Any, Optional

import httpx

from core.constants import GATEWAY_ENDPOINTS
from core.exceptions import BackendError, TransportError
from .base import ProcessingGateway

logger = logging.getLogger(__name__)


class HttpProcessingGateway(ProcessingGateway):
    """
    Processing gateway over HTTP.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8765",
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize HTTP gateway.

        Args:
            base_url: Backend server URL
            timeout: Request timeout in seconds (default: None, wait forever;
                cancellation is the caller's business)
            transport: Optional httpx transport (tests plug a MockTransport in)
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport
        )

    async def _call(self, operation: str, payload: dict) -> Any:
        """
        POST a request and return the decoded JSON body.

        Raises:
            BackendError: Non-2xx status or a body that is not JSON
            TransportError: Connection refused, dropped or timed out
        """
        endpoint = GATEWAY_ENDPOINTS[operation]
        try:
            response = await self.client.post(endpoint, json=payload)
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.warning("%s rejected by backend: %s", operation, e.response.status_code)
            raise BackendError(
                operation,
                e.response.text or e.response.reason_phrase,
                status_code=e.response.status_code
            ) from e
        except httpx.TransportError as e:
            logger.warning("%s could not reach backend at %s: %s", operation, self.base_url, e)
            raise TransportError(
                operation,
                f"could not reach processing backend at {self.base_url}: {e}"
            ) from e
        except json.JSONDecodeError as e:
            logger.warning("%s returned invalid JSON", operation)
            raise BackendError(
                operation,
                f"invalid JSON response: {response.text[:200]}",
                status_code=response.status_code
            ) from e

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
