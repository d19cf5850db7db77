"""
Pydantic schemas for processing backend request/response payloads.

Field names on the wire are camelCase; identifiers are opaque strings,
coordinates are pixel numbers and rotation is whole degrees.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.models import (
    ImageRecord,
    OcrCell,
    OutputCard,
    Region,
    RegionResult,
    validate_blur_radius,
    validate_threshold,
)


class WireModel(BaseModel):
    """Base for payloads; accepts both field names and aliases."""
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode='json')


class PathRequest(WireModel):
    """Request body for load_image and load_image_full."""
    path: str


class ImageFileResponse(WireModel):
    """Response for load_image."""
    id: str
    name: str
    path: str
    thumbnail: str = ""
    width: int = Field(ge=0)
    height: int = Field(ge=0)
    rotation: int = 0

    def to_record(self) -> ImageRecord:
        return ImageRecord(
            id=self.id,
            name=self.name,
            source_path=self.path,
            preview_data=self.thumbnail,
            width=self.width,
            height=self.height,
            rotation_degrees=self.rotation
        )


class RegionPayload(WireModel):
    """A region plus the rotation to apply before cropping."""
    id: str
    x: float = Field(ge=0)
    y: float = Field(ge=0)
    width: float = Field(ge=0)
    height: float = Field(ge=0)
    label: Optional[str] = None
    is_numeric_hint: bool = Field(default=False, alias='isNumericHint')
    rotation: int = Field(default=0, ge=0, lt=360, strict=True)

    @classmethod
    def from_region(cls, region: Region, rotation_degrees: int) -> 'RegionPayload':
        return cls(
            id=region.id,
            x=region.x,
            y=region.y,
            width=region.width,
            height=region.height,
            label=region.label,
            is_numeric_hint=region.is_numeric_hint,
            rotation=rotation_degrees
        )


class ProcessRegionRequest(WireModel):
    """Request body for process_region."""
    image_id: str = Field(alias='imageId')
    region: RegionPayload
    blur: float = 0.0
    threshold: int = -2

    @field_validator('blur', mode='before')
    @classmethod
    def check_blur(cls, value) -> float:
        return validate_blur_radius(value)

    @field_validator('threshold', mode='before')
    @classmethod
    def check_threshold(cls, value) -> int:
        return validate_threshold(value)


class PreprocessImageRequest(WireModel):
    """Request body for preprocess_image."""
    path: str
    blur: float = 0.0
    threshold: int = -2

    @field_validator('blur', mode='before')
    @classmethod
    def check_blur(cls, value) -> float:
        return validate_blur_radius(value)

    @field_validator('threshold', mode='before')
    @classmethod
    def check_threshold(cls, value) -> int:
        return validate_threshold(value)


class OcrCellPayload(WireModel):
    text: str
    original_text: str = Field(alias='originalText')
    confidence_score: float = Field(default=0.0, alias='confidenceScore')
    manually_edited: bool = Field(default=False, alias='manuallyEdited')

    @classmethod
    def from_cell(cls, cell: OcrCell) -> 'OcrCellPayload':
        return cls(
            text=cell.text,
            original_text=cell.original_text,
            confidence_score=cell.confidence_score,
            manually_edited=cell.manually_edited
        )

    def to_cell(self) -> OcrCell:
        return OcrCell(
            text=self.text,
            original_text=self.original_text,
            confidence_score=self.confidence_score,
            manually_edited=self.manually_edited
        )


class RegionResultPayload(WireModel):
    """Response for process_region; also nested in saved cards."""
    region_id: str = Field(alias='regionId')
    raw_text: str = Field(default="", alias='rawText')
    cells: List[List[OcrCellPayload]] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: RegionResult) -> 'RegionResultPayload':
        return cls(
            region_id=result.region_id,
            raw_text=result.raw_text,
            cells=[[OcrCellPayload.from_cell(cell) for cell in row] for row in result.cells]
        )

    def to_result(self) -> RegionResult:
        return RegionResult(
            region_id=self.region_id,
            raw_text=self.raw_text,
            cells=[[cell.to_cell() for cell in row] for row in self.cells]
        )


class OutputCardPayload(WireModel):
    image_id: str = Field(alias='imageId')
    image_name: str = Field(alias='imageName')
    results: List[RegionResultPayload] = Field(default_factory=list)

    @classmethod
    def from_card(cls, card: OutputCard) -> 'OutputCardPayload':
        return cls(
            image_id=card.image_id,
            image_name=card.image_name,
            results=[RegionResultPayload.from_result(result) for result in card.results]
        )


class SaveResultsRequest(WireModel):
    """Request body for save_results."""
    cards: List[OutputCardPayload]
    format: Literal['txt', 'csv']
