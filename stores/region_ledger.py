"""
Region ledger - regions per image, keyed by image id.
"""
import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from core.models import Region
from stores.observable import Store

logger = logging.getLogger(__name__)

RegionMap = Mapping[str, Tuple[Region, ...]]


class RegionLedger(Store[RegionMap]):
    """
    Ordered region lists per image id.

    The ledger does not check that an image id exists in the queue; the
    queue removes the matching entry itself when an image goes away. Region
    ids are expected to be unique within an image, which is the creator's
    job (``Region.create`` hands out fresh ids).
    """

    def __init__(self):
        super().__init__(MappingProxyType({}))

    def regions_for(self, image_id: str) -> Tuple[Region, ...]:
        """Regions of an image in user order, empty if there are none."""
        return self._value.get(image_id, ())

    def get_region(self, image_id: str, region_id: str) -> Optional[Region]:
        for region in self.regions_for(image_id):
            if region.id == region_id:
                return region
        return None

    def set_regions(self, image_id: str, regions: Iterable[Region]) -> None:
        """Replace the whole region list of an image."""
        self._replace(image_id, tuple(regions))
        logger.debug("Set %d regions on image %s", len(self.regions_for(image_id)), image_id)

    def add_region(self, image_id: str, region: Region) -> None:
        """Append a region, creating the image's list if needed."""
        self._replace(image_id, self.regions_for(image_id) + (region,))
        logger.debug("Added region %s to image %s", region.id, image_id)

    def update_region(self, image_id: str, region: Region) -> None:
        """Swap in an edited region, keeping its position. No-op if unknown."""
        current = self.regions_for(image_id)
        if not any(r.id == region.id for r in current):
            return
        self._replace(image_id, tuple(region if r.id == region.id else r for r in current))

    def remove_region(self, image_id: str, region_id: str) -> None:
        """Remove a region by id. No-op if absent."""
        current = self.regions_for(image_id)
        remaining = tuple(r for r in current if r.id != region_id)
        if len(remaining) == len(current):
            return
        self._replace(image_id, remaining)
        logger.debug("Removed region %s from image %s", region_id, image_id)

    def discard_image(self, image_id: str) -> None:
        """Drop every region of an image."""
        if image_id not in self._value:
            return
        mapping = dict(self._value)
        del mapping[image_id]
        self._commit(MappingProxyType(mapping))
        logger.debug("Discarded regions of image %s", image_id)

    def _replace(self, image_id: str, regions: Tuple[Region, ...]) -> None:
        mapping = dict(self._value)
        mapping[image_id] = regions
        self._commit(MappingProxyType(mapping))
