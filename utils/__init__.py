"""Utilities package - Helper functions for image payloads and output cards."""

from .image_utils import (
    split_data_url,
    decode_data_url,
    image_to_data_url,
    get_data_url_dimensions
)

from .result_utils import (
    merge_region_result,
    replace_cell,
    cells_text,
    card_text
)

__all__ = [
    # Image utils
    'split_data_url',
    'decode_data_url',
    'image_to_data_url',
    'get_data_url_dimensions',

    # Result utils
    'merge_region_result',
    'replace_cell',
    'cells_text',
    'card_text'
]
