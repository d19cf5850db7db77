"""
Result ledger - output cards, one per image.
"""
import logging
from typing import Optional, Tuple

from core.exceptions import InvalidArgumentError
from core.models import OutputCard
from stores.observable import Store
from utils.result_utils import replace_cell

logger = logging.getLogger(__name__)


class ResultLedger(Store[Tuple[OutputCard, ...]]):
    """
    Output cards keyed by image id, in the order images first produced one.

    Cards are not removed when their image leaves the queue; only ``clear``
    empties the ledger.
    """

    def __init__(self):
        super().__init__(())

    def __len__(self) -> int:
        return len(self._value)

    def card_for(self, image_id: str) -> Optional[OutputCard]:
        for card in self._value:
            if card.image_id == image_id:
                return card
        return None

    def upsert_card(self, card: OutputCard) -> None:
        """
        Insert a card, or replace the card with the same image id.

        The replacement is wholesale. Callers adding a single region result
        must read the current card, merge into it and upsert the merged card
        without awaiting in between, or sibling results are lost.
        """
        if self.card_for(card.image_id) is None:
            self._commit(self._value + (card,))
        else:
            self._commit(tuple(card if c.image_id == card.image_id else c for c in self._value))
        logger.debug("Upserted card for image %s (%d results)", card.image_id, len(card.results))

    def edit_cell(
        self,
        image_id: str,
        region_id: str,
        row: int,
        column: int,
        text: str
    ) -> None:
        """
        Correct one recognized cell by hand.

        Raises:
            InvalidArgumentError: If the card, region or cell does not exist
        """
        card = self.card_for(image_id)
        if card is None:
            raise InvalidArgumentError(f"No card for image {image_id}")
        self.upsert_card(replace_cell(card, region_id, row, column, text))

    def clear(self) -> None:
        """Drop every card."""
        self._commit(())
        logger.debug("Cleared result ledger")
