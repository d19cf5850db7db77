"""Services package - Async orchestration over a scan session."""

from .scan_service import ScanService
from .dependencies import get_gateway, get_scan_service

__all__ = [
    'ScanService',
    'get_gateway',
    'get_scan_service'
]
