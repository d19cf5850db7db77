"""
Image queue - the ordered list of images being worked on.
"""
import logging
from typing import Iterable, List, Optional, Tuple

from core.exceptions import InvalidArgumentError
from core.models import ImageRecord, ProcessingSettings
from stores.observable import Store, atomic
from stores.region_ledger import RegionLedger

logger = logging.getLogger(__name__)


class ImageQueue(Store[Tuple[ImageRecord, ...]]):
    """
    Ordered image records, unique by ``source_path``.

    Removing an image also drops its regions from ``region_ledger`` in the
    same transition: observers of either store never see the image gone and
    its regions still present.
    """

    def __init__(self, region_ledger: Optional[RegionLedger] = None):
        super().__init__(())
        self.region_ledger = region_ledger

    def __len__(self) -> int:
        return len(self._value)

    def ids(self) -> List[str]:
        return [record.id for record in self._value]

    def paths(self) -> set:
        return {record.source_path for record in self._value}

    def get(self, image_id: str) -> Optional[ImageRecord]:
        """Get a record by id."""
        for record in self._value:
            if record.id == image_id:
                return record
        return None

    def index_of(self, image_id: str) -> Optional[int]:
        for index, record in enumerate(self._value):
            if record.id == image_id:
                return index
        return None

    def add(self, images: Iterable[ImageRecord]) -> None:
        """
        Append images whose source path is not queued yet.

        Known paths and ids are skipped silently and existing records are
        left as they are. Within ``images`` the first record for a path or
        an id wins.

        Args:
            images: Records in the order they should be appended
        """
        known_paths = self.paths()
        known_ids = set(self.ids())
        fresh = []
        for record in images:
            if record.source_path in known_paths or record.id in known_ids:
                continue
            known_paths.add(record.source_path)
            known_ids.add(record.id)
            fresh.append(record)

        if not fresh:
            return
        self._commit(self._value + tuple(fresh))
        logger.debug("Queued %d images (%d total)", len(fresh), len(self._value))

    def remove(self, image_id: str) -> None:
        """Remove an image and its regions. Unknown ids are ignored."""
        remaining = tuple(record for record in self._value if record.id != image_id)
        stores = (self, self.region_ledger) if self.region_ledger is not None else (self,)
        with atomic(*stores):
            if len(remaining) != len(self._value):
                self._commit(remaining)
                logger.debug("Removed image %s", image_id)
            if self.region_ledger is not None:
                self.region_ledger.discard_image(image_id)

    def reorder(self, from_index: int, to_index: int) -> None:
        """
        Move the image at ``from_index`` so it ends up at ``to_index``.

        Raises:
            InvalidArgumentError: If either index is outside the queue
        """
        self._check_index(from_index, 'from_index')
        self._check_index(to_index, 'to_index')
        if from_index == to_index:
            return

        records = list(self._value)
        moved = records.pop(from_index)
        records.insert(to_index, moved)
        self._commit(tuple(records))
        logger.debug("Moved image %s from %d to %d", moved.id, from_index, to_index)

    def rotate(self, image_id: str, delta_degrees: int) -> None:
        """Rotate an image by whole degrees; the result wraps into [0, 360)."""
        record = self.get(image_id)
        if record is None:
            return
        self._swap(record.rotated(delta_degrees))

    def set_processing_settings(
        self,
        image_id: str,
        settings: Optional[ProcessingSettings]
    ) -> None:
        """
        Replace an image's processing settings.

        ``None`` clears them, which means blur and threshold are disabled.

        Raises:
            InvalidArgumentError: If ``settings`` is not a ProcessingSettings
        """
        if settings is not None and not isinstance(settings, ProcessingSettings):
            raise InvalidArgumentError(
                f"settings must be ProcessingSettings or None, got {type(settings).__name__}"
            )
        record = self.get(image_id)
        if record is None:
            return
        self._swap(record.with_settings(settings))

    def _swap(self, updated: ImageRecord) -> None:
        self._commit(tuple(updated if record.id == updated.id else record for record in self._value))

    def _check_index(self, index: int, name: str) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidArgumentError(f"{name} must be an integer, got {index!r}")
        if not 0 <= index < len(self._value):
            raise InvalidArgumentError(
                f"{name} {index} out of range for queue of {len(self._value)} images"
            )
