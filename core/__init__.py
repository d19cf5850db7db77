"""Core package - Domain models, identity, errors and constants."""

from .models import (
    ProcessingSettings,
    ImageRecord,
    Region,
    OcrCell,
    RegionResult,
    OutputCard,
    validate_threshold,
    validate_blur_radius,
    normalize_rotation
)
from .exceptions import (
    ScanError,
    InvalidArgumentError,
    GatewayError,
    BackendError,
    TransportError
)
from .identity import generate_id, filter_new_paths
from .constants import (
    THRESHOLD_DISABLED,
    THRESHOLD_OTSU,
    DEFAULT_PROCESSING_PARAMS,
    FULL_TURN_DEGREES,
    EXPORT_FORMATS,
    GATEWAY_ENDPOINTS
)

__all__ = [
    # Models
    'ProcessingSettings',
    'ImageRecord',
    'Region',
    'OcrCell',
    'RegionResult',
    'OutputCard',
    'validate_threshold',
    'validate_blur_radius',
    'normalize_rotation',

    # Errors
    'ScanError',
    'InvalidArgumentError',
    'GatewayError',
    'BackendError',
    'TransportError',

    # Identity
    'generate_id',
    'filter_new_paths',

    # Constants
    'THRESHOLD_DISABLED',
    'THRESHOLD_OTSU',
    'DEFAULT_PROCESSING_PARAMS',
    'FULL_TURN_DEGREES',
    'EXPORT_FORMATS',
    'GATEWAY_ENDPOINTS'
]
