"""
Scan Service - Runs backend requests against a scan session.

Store mutations are synchronous; the only suspension points are the gateway
calls. Nothing is written to the session until a response has arrived, and
a failed call leaves the session exactly as it was.
"""
import asyncio
import logging
from typing import Iterable, List, Optional

from PIL import Image

from config.settings import Settings, settings as default_settings
from core.exceptions import GatewayError, InvalidArgumentError
from core.identity import filter_new_paths
from core.models import ImageRecord, OutputCard, ProcessingSettings, RegionResult
from gateway.base import ProcessingGateway
from stores.session import ScanSession
from utils.image_utils import decode_data_url
from utils.result_utils import merge_region_result

logger = logging.getLogger(__name__)


class ScanService:
    """Orchestrates ingestion, recognition, previews and export."""

    def __init__(
        self,
        session: ScanSession,
        gateway: ProcessingGateway,
        config: Optional[Settings] = None
    ):
        """
        Initialize scan service.

        Args:
            session: Session whose stores are read and updated
            gateway: Processing backend gateway
            config: Settings (default: module-level settings)
        """
        self.session = session
        self.gateway = gateway
        self.config = config or default_settings

    async def add_images(self, paths: Iterable[str]) -> List[ImageRecord]:
        """
        Load images from disk through the backend and queue them.

        Paths already queued, and repeats within ``paths``, are not sent to
        the backend. Loads run concurrently; if any fails, nothing is queued
        and the error propagates.

        Args:
            paths: Source file paths in the order they should be queued

        Returns:
            Records that were actually added
        """
        fresh = filter_new_paths(paths, self.session.images.paths())
        if not fresh:
            return []

        logger.info("Loading %d images", len(fresh))
        try:
            records = await asyncio.gather(*(self.gateway.load_image(path) for path in fresh))
        except GatewayError as e:
            logger.warning("Image ingestion failed: %s", e)
            raise

        self.session.images.add(records)
        # Another ingestion may have queued the same path or id while we waited
        return [record for record in records if self.session.images.get(record.id) is record]

    async def process_region(
        self,
        image_id: str,
        region_id: str,
        processing: Optional[ProcessingSettings] = None
    ) -> RegionResult:
        """
        Recognize one region and merge the result into the image's card.

        The image's current rotation is sent along with ``processing``, or the
        image's stored settings when ``processing`` is None. Passing settings
        here does not store them on the image.

        Two calls for the same region that overlap both land in the card;
        whichever response arrives last wins. Calls for different regions
        merge independently of arrival order.

        Raises:
            InvalidArgumentError: If the image or region is unknown
            GatewayError: If the backend request failed
        """
        record = self._require_image(image_id)
        region = self.session.regions.get_region(image_id, region_id)
        if region is None:
            raise InvalidArgumentError(f"Region not found: {region_id} on image {image_id}")
        processing = processing or record.effective_settings

        try:
            result = await self.gateway.process_region(
                image_id,
                region,
                record.rotation_degrees,
                blur_radius=processing.blur_radius,
                threshold=processing.threshold
            )
        except GatewayError as e:
            logger.warning("Region %s of image %s failed: %s", region_id, image_id, e)
            raise

        # Read-modify-write with no await in between
        card = self.session.results.card_for(image_id)
        self.session.results.upsert_card(
            merge_region_result(card, image_id, record.name, result)
        )
        logger.info("Processed region %s of image %s", region_id, image_id)
        return result

    async def process_image(self, image_id: str) -> Optional[OutputCard]:
        """
        Recognize every region of an image concurrently.

        Each result is merged as soon as it arrives, so a failing region does
        not discard the others. Errors are raised only once every request
        has settled.

        Returns:
            The image's card after all requests finished, or None if the
            image has no regions and no earlier results

        Raises:
            GatewayError: The first failure, after the other regions finished
        """
        self._require_image(image_id)
        regions = self.session.regions.regions_for(image_id)
        outcomes = await asyncio.gather(
            *(self.process_region(image_id, region.id) for region in regions),
            return_exceptions=True
        )
        errors = [outcome for outcome in outcomes if isinstance(outcome, BaseException)]
        if errors:
            logger.warning("%d of %d regions of image %s failed", len(errors), len(regions), image_id)
            raise errors[0]
        return self.session.results.card_for(image_id)

    async def preview(
        self,
        image_id: str,
        processing: Optional[ProcessingSettings] = None
    ) -> str:
        """Render a preprocessing preview without touching the session."""
        record = self._require_image(image_id)
        processing = processing or record.effective_settings
        return await self.gateway.preprocess_image(
            record.source_path,
            processing.blur_radius,
            processing.threshold
        )

    async def load_full_image(self, image_id: str) -> str:
        """Full resolution data URL for an image. Not cached."""
        record = self._require_image(image_id)
        return await self.gateway.load_image_full(record.source_path)

    async def open_full_image(self, image_id: str) -> Image.Image:
        """Full resolution image decoded with Pillow."""
        return decode_data_url(await self.load_full_image(image_id))

    async def export(self, format: Optional[str] = None) -> str:
        """
        Save all cards through the backend.

        Args:
            format: 'txt' or 'csv' (default: configured export format)

        Returns:
            Path the backend wrote to
        """
        format = format or self.config.scan_default_export_format
        cards = self.session.results.value
        path = await self.gateway.save_results(cards, format)
        logger.info("Exported %d cards to %s", len(cards), path)
        return path

    def reset_results(self) -> None:
        """Drop every card."""
        self.session.clear_results()

    def _require_image(self, image_id: str) -> ImageRecord:
        record = self.session.images.get(image_id)
        if record is None:
            raise InvalidArgumentError(f"Image not found: {image_id}")
        return record
