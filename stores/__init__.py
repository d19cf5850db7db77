"""Stores package - Observable in-memory state of a scan session."""

from .observable import Store, DerivedStore, atomic
from .image_queue import ImageQueue
from .region_ledger import RegionLedger
from .result_ledger import ResultLedger
from .views import CurrentIndex, current_image_view, total_images_view
from .session import ScanSession

__all__ = [
    'Store',
    'DerivedStore',
    'atomic',
    'ImageQueue',
    'RegionLedger',
    'ResultLedger',
    'CurrentIndex',
    'current_image_view',
    'total_images_view',
    'ScanSession'
]
