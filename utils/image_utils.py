"""
Image utilities for the scan queue.

The backend ships pixels as base64 ``data:`` URLs; these helpers turn them
back into Pillow images.
"""
import base64
import binascii
import re
from io import BytesIO
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from core.constants import DATA_URL_PATTERN
from core.exceptions import InvalidArgumentError


def split_data_url(data_url: str) -> Tuple[str, bytes]:
    """
    Split a base64 data URL into its MIME type and raw bytes.

    Args:
        data_url: String like 'data:image/png;base64,iVBOR...'

    Returns:
        Tuple of (mime_type, decoded_bytes)

    Raises:
        InvalidArgumentError: If the string is not a base64 data URL
    """
    match = re.match(DATA_URL_PATTERN, data_url or "", re.DOTALL)
    if not match:
        raise InvalidArgumentError("Not a base64 data URL")
    try:
        return match.group('mime'), base64.b64decode(match.group('data'), validate=True)
    except binascii.Error as e:
        raise InvalidArgumentError(f"Corrupt base64 payload: {e}") from e


def decode_data_url(data_url: str) -> Image.Image:
    """
    Decode a base64 data URL into a PIL Image.

    Raises:
        InvalidArgumentError: If the payload is not a readable image
    """
    _, raw = split_data_url(data_url)
    try:
        img = Image.open(BytesIO(raw))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidArgumentError(f"Data URL does not contain an image: {e}") from e
    return img


def image_to_data_url(img: Image.Image, format: str = 'PNG') -> str:
    """Encode a PIL Image as a base64 data URL."""
    buf = BytesIO()
    img.save(buf, format=format)
    encoded = base64.b64encode(buf.getvalue()).decode()
    return f"data:image/{format.lower()};base64,{encoded}"


def get_data_url_dimensions(data_url: str) -> Tuple[int, int]:
    """Width and height of the image inside a data URL."""
    return decode_data_url(data_url).size
