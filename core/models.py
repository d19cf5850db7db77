"""
Core domain models for the scan queue.

Records are frozen: every update builds a new instance, so a snapshot handed
to an observer never changes underneath it.
"""
import math
from dataclasses import dataclass, field, replace
from numbers import Real
from typing import Optional, Sequence, Tuple

from core.constants import (
    DEFAULT_PROCESSING_PARAMS,
    FULL_TURN_DEGREES,
    THRESHOLD_DISABLED,
    THRESHOLD_MAX_LEVEL,
    THRESHOLD_MIN_LEVEL,
    THRESHOLD_OTSU,
)
from core.exceptions import InvalidArgumentError
from core.identity import generate_id


def validate_threshold(threshold) -> int:
    """
    Check a binarization threshold.

    Args:
        threshold: -2 (disabled), -1 (Otsu) or a fixed level 0-255

    Returns:
        The threshold unchanged

    Raises:
        InvalidArgumentError: If the value is not one of the accepted modes
    """
    if isinstance(threshold, bool) or not isinstance(threshold, int):
        raise InvalidArgumentError(f"threshold must be an integer, got {threshold!r}")
    if threshold in (THRESHOLD_DISABLED, THRESHOLD_OTSU):
        return threshold
    if not THRESHOLD_MIN_LEVEL <= threshold <= THRESHOLD_MAX_LEVEL:
        raise InvalidArgumentError(
            f"threshold must be -2, -1 or within "
            f"{THRESHOLD_MIN_LEVEL}-{THRESHOLD_MAX_LEVEL}, got {threshold}"
        )
    return threshold


def validate_blur_radius(blur_radius) -> float:
    """Check a blur radius is a finite, non-negative number."""
    if isinstance(blur_radius, bool) or not isinstance(blur_radius, Real):
        raise InvalidArgumentError(f"blur radius must be a number, got {blur_radius!r}")
    if math.isnan(blur_radius) or math.isinf(blur_radius) or blur_radius < 0:
        raise InvalidArgumentError(f"blur radius must be >= 0, got {blur_radius}")
    return float(blur_radius)


def normalize_rotation(degrees: int) -> int:
    """Wrap whole degrees into [0, 360)."""
    if isinstance(degrees, bool) or not isinstance(degrees, int):
        raise InvalidArgumentError(f"rotation must be whole degrees, got {degrees!r}")
    return (degrees + FULL_TURN_DEGREES) % FULL_TURN_DEGREES


@dataclass(frozen=True)
class ProcessingSettings:
    """Preprocessing applied before recognition."""
    blur_radius: float = DEFAULT_PROCESSING_PARAMS['blur_radius']
    threshold: int = DEFAULT_PROCESSING_PARAMS['threshold']

    def __post_init__(self):
        object.__setattr__(self, 'blur_radius', validate_blur_radius(self.blur_radius))
        validate_threshold(self.threshold)

    @classmethod
    def disabled(cls) -> 'ProcessingSettings':
        """Settings equivalent to an image that has none."""
        return cls()

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'blur_radius': self.blur_radius,
            'threshold': self.threshold
        }


@dataclass(frozen=True)
class ImageRecord:
    """An image in the queue. ``source_path`` is the deduplication key."""
    id: str
    name: str
    source_path: str
    preview_data: str = ""
    width: int = 0
    height: int = 0
    rotation_degrees: int = 0
    processing_settings: Optional[ProcessingSettings] = None

    def __post_init__(self):
        object.__setattr__(self, 'rotation_degrees', normalize_rotation(self.rotation_degrees))
        for name in ('width', 'height'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidArgumentError(f"image {name} must be an integer, got {value!r}")
            if value < 0:
                raise InvalidArgumentError(f"image {name} must be >= 0, got {value}")

    @property
    def effective_settings(self) -> ProcessingSettings:
        """Stored settings, or the disabled defaults when none were set."""
        return self.processing_settings or ProcessingSettings.disabled()

    def rotated(self, delta_degrees: int) -> 'ImageRecord':
        """Return a copy rotated by ``delta_degrees`` (negative turns left)."""
        normalize_rotation(delta_degrees)
        return replace(self, rotation_degrees=self.rotation_degrees + delta_degrees)

    def with_settings(self, settings: Optional[ProcessingSettings]) -> 'ImageRecord':
        return replace(self, processing_settings=settings)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'id': self.id,
            'name': self.name,
            'source_path': self.source_path,
            'preview_data': self.preview_data,
            'width': self.width,
            'height': self.height,
            'rotation_degrees': self.rotation_degrees,
            'processing_settings': (
                self.processing_settings.to_dict() if self.processing_settings else None
            )
        }


@dataclass(frozen=True)
class Region:
    """A user-drawn rectangle in unrotated image pixels."""
    id: str
    x: float
    y: float
    width: float
    height: float
    label: Optional[str] = None
    is_numeric_hint: bool = False

    def __post_init__(self):
        for name in ('x', 'y', 'width', 'height'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise InvalidArgumentError(f"region {name} must be a number, got {value!r}")
            if value < 0:
                raise InvalidArgumentError(f"region {name} must be >= 0, got {value}")

    @classmethod
    def create(
        cls,
        x: float,
        y: float,
        width: float,
        height: float,
        label: Optional[str] = None,
        is_numeric_hint: bool = False
    ) -> 'Region':
        """Create a region with a freshly generated id."""
        return cls(
            id=generate_id(),
            x=x,
            y=y,
            width=width,
            height=height,
            label=label,
            is_numeric_hint=is_numeric_hint
        )

    @property
    def area(self) -> float:
        return self.width * self.height

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'id': self.id,
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
            'label': self.label,
            'is_numeric_hint': self.is_numeric_hint
        }


@dataclass(frozen=True)
class OcrCell:
    """One recognized cell. ``original_text`` keeps what the engine read."""
    text: str
    original_text: str
    confidence_score: float = 0.0
    manually_edited: bool = False

    def edited(self, text: str) -> 'OcrCell':
        return replace(self, text=text, manually_edited=True)


@dataclass(frozen=True)
class RegionResult:
    """Recognition output for a single region."""
    region_id: str
    raw_text: str
    cells: Tuple[Tuple[OcrCell, ...], ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'cells', tuple(tuple(row) for row in self.cells))

    @property
    def row_count(self) -> int:
        return len(self.cells)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'region_id': self.region_id,
            'raw_text': self.raw_text,
            'cells': [
                [
                    {
                        'text': cell.text,
                        'original_text': cell.original_text,
                        'confidence_score': cell.confidence_score,
                        'manually_edited': cell.manually_edited
                    }
                    for cell in row
                ]
                for row in self.cells
            ]
        }


@dataclass(frozen=True)
class OutputCard:
    """
    Aggregated output for one image.

    Holds at most one result per ``region_id``. Cards are replaced wholesale
    in the result ledger, so anything that adds a region result must start
    from the current card (see ``utils.result_utils.merge_region_result``).
    """
    image_id: str
    image_name: str
    results: Tuple[RegionResult, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'results', tuple(self.results))
        region_ids = self.region_ids()
        if len(set(region_ids)) != len(region_ids):
            raise InvalidArgumentError(
                f"card for image {self.image_id} has more than one result per region: {region_ids}"
            )

    def result_for(self, region_id: str) -> Optional[RegionResult]:
        """Find the result for a region, if it was processed."""
        for result in self.results:
            if result.region_id == region_id:
                return result
        return None

    def region_ids(self) -> Sequence[str]:
        return [result.region_id for result in self.results]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'image_id': self.image_id,
            'image_name': self.image_name,
            'results': [result.to_dict() for result in self.results]
        }
