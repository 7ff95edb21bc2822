"""Order review helpers."""
from typing import Dict, List, Sequence

from app.services.catalog.index import CatalogIndex
from app.services.ordering.models import ResolvedOrderLine


class OrderValidator:
    """Service for flagging lines a human order taker should check."""

    def suggest_alternatives(
        self, invalid_item_name: str, index: CatalogIndex, limit: int = 3
    ) -> List[str]:
        """
        Suggest catalog item names for an unmatched item name.

        Args:
            invalid_item_name: The unmatched item name
            index: Catalog snapshot to search
            limit: Maximum number of suggestions

        Returns:
            List of suggested item names
        """
        invalid_lower = invalid_item_name.lower()
        words = [word for word in invalid_lower.split() if len(word) > 2]

        suggestions = []
        for item in index.items:
            item_lower = item.name.lower()
            if (
                invalid_lower in item_lower
                or item_lower in invalid_lower
                or any(word in item_lower for word in words)
            ):
                suggestions.append(item.name)
                if len(suggestions) >= limit:
                    break

        return suggestions

    def needs_review(
        self, lines: Sequence[ResolvedOrderLine], index: CatalogIndex
    ) -> List[Dict[str, object]]:
        """List custom fallback lines with suggested catalog alternatives."""
        return [
            {
                "name": line.name,
                "quantity": line.quantity,
                "suggestions": self.suggest_alternatives(line.name or "", index),
            }
            for line in lines
            if line.is_fallback
        ]
