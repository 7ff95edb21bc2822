"""Catalog resolution for canonical order lines."""
import logging
from typing import List, Optional, Sequence

from app.services.catalog.index import CatalogIndex
from app.services.ordering.models import CanonicalOrderLine, Money, ResolvedOrderLine

logger = logging.getLogger(__name__)

# Placeholder price for custom lines with no catalog match (minor units)
DEFAULT_PRICE_AMOUNT = 1000
DEFAULT_CURRENCY = "USD"


def _modifier_note(phrases: Sequence[str]) -> str:
    return f"Modifiers: {', '.join(phrases)}" if phrases else ""


class CatalogResolver:
    """Maps canonical order lines onto catalog identifiers."""

    def __init__(
        self,
        default_price_amount: int = DEFAULT_PRICE_AMOUNT,
        currency: str = DEFAULT_CURRENCY,
    ):
        self.default_price = Money(amount=default_price_amount, currency=currency)

    def resolve(self, line: CanonicalOrderLine, index: CatalogIndex) -> ResolvedOrderLine:
        """
        Resolve one line against a catalog snapshot.

        Never raises for matching problems: an unmatched item becomes a
        custom line carrying the spoken name and the placeholder price, and
        unmatched modifier phrases are kept in the note.
        """
        variation_id = self._explicit_variation_id(line, index)
        if variation_id is None:
            match = index.find_best_item_match(line.display_name)
            if match is None:
                logger.info(
                    f"[RESOLVER] No catalog match for '{line.display_name}' - using custom line"
                )
                return ResolvedOrderLine(
                    quantity=line.quantity,
                    name=line.display_name,
                    base_price=self.default_price,
                    note=_modifier_note(line.modifier_phrases),
                )
            logger.debug(
                f"[RESOLVER] Matched '{line.display_name}' to '{match.entry.name}' "
                f"(score {match.score}, variation {match.variation_id})"
            )
            variation_id = match.variation_id

        modifier_ids: List[str] = []
        for phrase in line.modifier_phrases:
            modifier_id = index.find_modifier_match(phrase)
            if modifier_id is None:
                logger.info(f"[RESOLVER] No modifier match for '{phrase}' on '{line.display_name}'")
            elif modifier_id not in modifier_ids:
                modifier_ids.append(modifier_id)

        return ResolvedOrderLine(
            quantity=line.quantity,
            catalog_object_id=variation_id,
            modifier_ids=modifier_ids,
            note=_modifier_note(line.modifier_phrases),
        )

    def resolve_all(
        self, lines: Sequence[CanonicalOrderLine], index: CatalogIndex
    ) -> List[ResolvedOrderLine]:
        """Resolve every line against the same snapshot."""
        return [self.resolve(line, index) for line in lines]

    @staticmethod
    def _explicit_variation_id(
        line: CanonicalOrderLine, index: CatalogIndex
    ) -> Optional[str]:
        object_id = line.catalog_object_id
        if not object_id or "placeholder" in object_id:
            return None
        if index.find_variation(object_id) is not None:
            return object_id
        item = index.get_item(object_id)
        if item is not None:
            return item.primary_variation_id
        logger.info(f"[RESOLVER] Ignoring unknown catalog_object_id '{object_id}'")
        return None
