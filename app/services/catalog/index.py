"""In-memory catalog index used to resolve spoken items."""
import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from app.services.catalog.base import (
    ITEM,
    ITEM_VARIATION,
    MODIFIER,
    CatalogEntry,
    CatalogRecord,
    ItemMatch,
    ModifierEntry,
    VariationRef,
)

logger = logging.getLogger(__name__)

EXACT_MATCH_SCORE = 100
PARTIAL_MATCH_SCORE = 90


class CatalogSnapshotError(ValueError):
    """Raised when a catalog snapshot cannot be indexed."""


def _normalize(text: Optional[str]) -> str:
    return (text or "").strip().lower()


class CatalogIndex:
    """
    Read-only snapshot of catalog items and modifiers.

    Instances are never mutated after build(); a catalog refresh produces a
    new index so concurrent readers always see one consistent snapshot.
    """

    def __init__(
        self,
        items: Iterable[CatalogEntry] = (),
        modifiers: Iterable[ModifierEntry] = (),
    ):
        self._items: Tuple[CatalogEntry, ...] = tuple(items)
        self._modifiers: Tuple[ModifierEntry, ...] = tuple(modifiers)
        self._items_by_id: Mapping[str, CatalogEntry] = MappingProxyType(
            {item.id: item for item in self._items}
        )
        self._variation_owner: Mapping[str, CatalogEntry] = MappingProxyType(
            {
                variation.id: item
                for item in self._items
                for variation in item.variations
            }
        )

    @classmethod
    def build(cls, raw_entries: Iterable[Dict[str, Any]]) -> "CatalogIndex":
        """
        Build an index from raw catalog records.

        Raises:
            CatalogSnapshotError: if a record lacks an id or an item lacks a name
        """
        records: List[CatalogRecord] = []
        for position, raw in enumerate(raw_entries):
            try:
                records.append(CatalogRecord.model_validate(raw))
            except ValidationError as e:
                logger.error(f"[CATALOG] Malformed record at position {position}: {e}")
                raise CatalogSnapshotError(
                    f"Catalog record at position {position} is malformed"
                ) from e

        standalone_variations: Dict[str, List[VariationRef]] = {}
        for record in records:
            if record.type == ITEM_VARIATION and record.item_id:
                standalone_variations.setdefault(record.item_id, []).append(
                    VariationRef(id=record.id, name=record.name, price=record.price)
                )
        variations_by_id = {
            variation.id: variation
            for group in standalone_variations.values()
            for variation in group
        }

        items: List[CatalogEntry] = []
        modifiers: List[ModifierEntry] = []
        for record in records:
            if record.type == ITEM:
                if not _normalize(record.name):
                    raise CatalogSnapshotError(f"Catalog item '{record.id}' has no name")
                if record.variations:
                    # Declared references win; fill in names/prices from standalone records
                    variations = [
                        variations_by_id.get(ref.id, ref) if ref.name is None else ref
                        for ref in record.variations
                    ]
                else:
                    variations = standalone_variations.get(record.id, [])
                items.append(
                    CatalogEntry(
                        id=record.id,
                        name=record.name,
                        description=record.description,
                        variations=variations,
                    )
                )
            elif record.type == MODIFIER:
                if not _normalize(record.name):
                    logger.warning(f"[CATALOG] Skipping unnamed modifier '{record.id}'")
                    continue
                modifiers.append(ModifierEntry(id=record.id, name=record.name, price=record.price))
            elif record.type != ITEM_VARIATION:
                logger.debug(f"[CATALOG] Ignoring record '{record.id}' of type {record.type}")

        logger.info(f"[CATALOG] Indexed {len(items)} items and {len(modifiers)} modifiers")
        return cls(items=items, modifiers=modifiers)

    @property
    def items(self) -> Tuple[CatalogEntry, ...]:
        return self._items

    @property
    def modifiers(self) -> Tuple[ModifierEntry, ...]:
        return self._modifiers

    def __len__(self) -> int:
        return len(self._items)

    def get_item(self, item_id: str) -> Optional[CatalogEntry]:
        """Get an item by its id."""
        return self._items_by_id.get(item_id)

    def find_variation(self, variation_id: str) -> Optional[CatalogEntry]:
        """Get the item owning a variation id."""
        return self._variation_owner.get(variation_id)

    def find_best_item_match(self, free_text_name: str) -> Optional[ItemMatch]:
        """
        Find the catalog item best matching a spoken name.

        Exact (normalized) equality scores 100; otherwise when one name
        contains the other the score is 90 minus the length difference.
        Only scores above zero match, and the first item in snapshot order
        wins ties.
        """
        wanted = _normalize(free_text_name)
        if not wanted:
            return None

        best: Optional[CatalogEntry] = None
        best_score = 0
        for item in self._items:
            candidate = _normalize(item.name)
            if candidate == wanted:
                score = EXACT_MATCH_SCORE
            elif candidate in wanted or wanted in candidate:
                score = PARTIAL_MATCH_SCORE - abs(len(candidate) - len(wanted))
            else:
                continue
            if score > best_score:
                best, best_score = item, score

        if best is None:
            return None
        return ItemMatch(entry=best, variation_id=best.primary_variation_id, score=best_score)

    def find_modifier_match(self, free_text_phrase: str) -> Optional[str]:
        """Find the id of the modifier matching a spoken phrase."""
        wanted = _normalize(free_text_phrase)
        if not wanted:
            return None

        for modifier in self._modifiers:
            if _normalize(modifier.name) == wanted:
                return modifier.id
        for modifier in self._modifiers:
            candidate = _normalize(modifier.name)
            if candidate in wanted or wanted in candidate:
                return modifier.id
        return None

    def search_items(self, text: str, limit: int = 5) -> List[CatalogEntry]:
        """Items whose name starts with the given text."""
        prefix = _normalize(text)
        return [item for item in self._items if _normalize(item.name).startswith(prefix)][:limit]

    def search_modifiers(self, text: str, limit: int = 5) -> List[ModifierEntry]:
        """Modifiers whose name contains the given text."""
        wanted = _normalize(text)
        return [m for m in self._modifiers if wanted in _normalize(m.name)][:limit]

    def get_menu_text(self) -> str:
        """Get the catalog as formatted text for the voice agent's prompt."""
        lines = ["Here is the current menu:"]
        for item in self._items:
            lines.append(f"• {item.name} (item_id={item.id})")
            if item.variations:
                variations = ", ".join(f"{v.name or 'Regular'}({v.id})" for v in item.variations)
                lines.append(f"  – Variations: {variations}")
        for modifier in self._modifiers:
            lines.append(f"• {modifier.name} (modifier_id={modifier.id})")
        return "\n".join(lines)
