"""
Helpers for output cards.

Cards are replaced wholesale in the result ledger, so region-level updates
are built here as new cards starting from the current one.
"""
from typing import Optional

from core.exceptions import InvalidArgumentError
from core.models import OutputCard, RegionResult


def merge_region_result(
    card: Optional[OutputCard],
    image_id: str,
    image_name: str,
    result: RegionResult
) -> OutputCard:
    """
    Fold one region result into an image's card.

    An existing entry for the same region is replaced where it stands;
    otherwise the result is appended. Results of other regions are kept.

    Args:
        card: Current card for the image, or None if it has none yet
        image_id: Image the result belongs to
        image_name: Display name used when a new card is started
        result: Fresh recognition output

    Returns:
        New card including ``result``
    """
    if card is None:
        return OutputCard(image_id=image_id, image_name=image_name, results=(result,))

    if card.result_for(result.region_id) is None:
        results = card.results + (result,)
    else:
        results = tuple(
            result if existing.region_id == result.region_id else existing
            for existing in card.results
        )
    return OutputCard(image_id=card.image_id, image_name=card.image_name, results=results)


def replace_cell(
    card: OutputCard,
    region_id: str,
    row: int,
    column: int,
    text: str
) -> OutputCard:
    """
    Return a card with one cell's text replaced and flagged as edited.

    Raises:
        InvalidArgumentError: If the region or cell does not exist
    """
    result = card.result_for(region_id)
    if result is None:
        raise InvalidArgumentError(f"No result for region {region_id} on image {card.image_id}")
    if not 0 <= row < len(result.cells) or not 0 <= column < len(result.cells[row]):
        raise InvalidArgumentError(f"No cell at row {row}, column {column} in region {region_id}")

    cells = tuple(
        tuple(
            cell.edited(text) if (r, c) == (row, column) else cell
            for c, cell in enumerate(cells_row)
        )
        for r, cells_row in enumerate(result.cells)
    )
    updated = RegionResult(region_id=result.region_id, raw_text=result.raw_text, cells=cells)
    return merge_region_result(card, card.image_id, card.image_name, updated)


def cells_text(result: RegionResult, separator: str = '\t') -> str:
    """Join a result's cell grid into lines of text."""
    return '\n'.join(separator.join(cell.text for cell in row) for row in result.cells)


def card_text(card: OutputCard, separator: str = '\t') -> str:
    """All of a card's results as text, one block per region."""
    blocks = []
    for result in card.results:
        blocks.append(cells_text(result, separator) if result.cells else result.raw_text.strip())
    return '\n\n'.join(block for block in blocks if block)
