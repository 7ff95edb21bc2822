"""Order line aggregation."""
from typing import Dict, List, Sequence, Union

from app.services.ordering.models import CanonicalOrderLine, RawOrderLine, normalize_name

OrderLine = Union[RawOrderLine, CanonicalOrderLine]


class OrderAggregator:
    """Merges candidate lines into one line per distinct item name."""

    def aggregate(self, lines: Sequence[OrderLine]) -> List[CanonicalOrderLine]:
        """
        Group lines by normalized name.

        Quantities are summed, modifier phrases are unioned in first-seen
        order, and output follows the first occurrence of each name. Lines
        that are already canonical can be passed back in unchanged.
        """
        merged: Dict[str, dict] = {}
        for line in lines:
            display_name = (
                line.display_name if isinstance(line, CanonicalOrderLine) else line.name
            ).strip()
            key = normalize_name(display_name)
            if not key:
                continue

            entry = merged.get(key)
            if entry is None:
                merged[key] = {
                    "normalized_name": key,
                    "display_name": display_name,
                    "quantity": line.quantity,
                    "modifier_phrases": list(line.modifier_phrases),
                    "catalog_object_id": line.catalog_object_id,
                }
                continue

            entry["quantity"] += line.quantity
            for phrase in line.modifier_phrases:
                if phrase not in entry["modifier_phrases"]:
                    entry["modifier_phrases"].append(phrase)
            if entry["catalog_object_id"] is None:
                entry["catalog_object_id"] = line.catalog_object_id

        return [CanonicalOrderLine(**entry) for entry in merged.values()]
