"""
Base abstract class for processing gateways.

A gateway is the only way to reach the processing backend (decoding,
preprocessing, recognition and result files). Every call is asynchronous
and may fail with a BackendError or a TransportError. Gateways never retry
and never apply a timeout of their own.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Sequence

from pydantic import ValidationError

from core.constants import EXPORT_FORMATS, THRESHOLD_DISABLED
from core.exceptions import BackendError, InvalidArgumentError
from core.models import ImageRecord, OutputCard, Region, RegionResult
from .schemas import (
    ImageFileResponse,
    OutputCardPayload,
    PathRequest,
    PreprocessImageRequest,
    ProcessRegionRequest,
    RegionPayload,
    RegionResultPayload,
    SaveResultsRequest,
)

logger = logging.getLogger(__name__)


class ProcessingGateway(ABC):
    """
    Request/response contract with the processing backend.

    Subclasses only implement ``_call``; argument validation, payload
    encoding and response decoding live here so every transport speaks the
    same wire format.
    """

    @abstractmethod
    async def _call(self, operation: str, payload: dict) -> Any:
        """
        Send one request to the backend.

        Args:
            operation: Request name, a key of GATEWAY_ENDPOINTS
            payload: JSON-ready request body

        Returns:
            Decoded JSON response

        Raises:
            BackendError: If the backend rejected the request
            TransportError: If the backend could not be reached
        """
        pass

    async def close(self):
        """Release transport resources."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def load_image(self, path: str) -> ImageRecord:
        """Decode an image and build its queue record with a thumbnail."""
        data = await self._call('load_image', PathRequest(path=path).to_wire())
        return self._decode('load_image', ImageFileResponse, data).to_record()

    async def load_image_full(self, path: str) -> str:
        """Full resolution image as a data URL, fetched on demand."""
        data = await self._call('load_image_full', PathRequest(path=path).to_wire())
        return self._decode_text('load_image_full', data)

    async def process_region(
        self,
        image_id: str,
        region: Region,
        rotation_degrees: int,
        blur_radius: float = 0.0,
        threshold: int = THRESHOLD_DISABLED
    ) -> RegionResult:
        """
        Recognize the text inside one region.

        The region rectangle is in unrotated image pixels. Rotation and
        preprocessing are taken from the arguments, not from stored state,
        so callers can try settings they have not committed.

        Raises:
            InvalidArgumentError: If rotation, blur or threshold are out of range
        """
        request = self._build('process_region', lambda: ProcessRegionRequest(
            image_id=image_id,
            region=RegionPayload.from_region(region, rotation_degrees),
            blur=blur_radius,
            threshold=threshold
        ))
        data = await self._call('process_region', request.to_wire())
        return self._decode('process_region', RegionResultPayload, data).to_result()

    async def preprocess_image(self, path: str, blur_radius: float, threshold: int) -> str:
        """Render a preview of the image with the given preprocessing."""
        request = self._build('preprocess_image', lambda: PreprocessImageRequest(
            path=path,
            blur=blur_radius,
            threshold=threshold
        ))
        data = await self._call('preprocess_image', request.to_wire())
        return self._decode_text('preprocess_image', data)

    async def save_results(self, cards: Sequence[OutputCard], format: str) -> str:
        """
        Hand the cards to the backend to write out.

        Returns:
            Path of the written file

        Raises:
            InvalidArgumentError: If ``format`` is not 'txt' or 'csv'
        """
        if format not in EXPORT_FORMATS:
            raise InvalidArgumentError(
                f"Unsupported export format: '{format}'. Supported formats: 'txt', 'csv'"
            )
        request = SaveResultsRequest(
            cards=[OutputCardPayload.from_card(card) for card in cards],
            format=format
        )
        data = await self._call('save_results', request.to_wire())
        return self._decode_text('save_results', data)

    @staticmethod
    def _build(operation: str, factory):
        try:
            return factory()
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid {operation} arguments: {e}") from e

    @staticmethod
    def _decode(operation: str, schema, data):
        try:
            return schema.model_validate(data)
        except ValidationError as e:
            logger.warning("Malformed %s response: %s", operation, e)
            raise BackendError(operation, f"malformed response: {e}") from e

    @staticmethod
    def _decode_text(operation: str, data) -> str:
        if not isinstance(data, str):
            raise BackendError(operation, f"expected a string response, got {type(data).__name__}")
        return data
