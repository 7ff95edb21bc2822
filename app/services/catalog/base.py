"""Catalog snapshot models and provider interface."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_validator

ITEM = "ITEM"
ITEM_VARIATION = "ITEM_VARIATION"
MODIFIER = "MODIFIER"


def _price_amount(data: Dict[str, Any]) -> Optional[int]:
    money = data.get("price_money")
    if isinstance(money, dict):
        return money.get("amount")
    return data.get("price")


class VariationRef(BaseModel):
    """Reference to a purchasable variation of an item."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: Optional[str] = None
    price: Optional[int] = None

    @model_validator(mode="before")
    @classmethod
    def _flatten(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("item_variation_data"), dict):
            nested = data["item_variation_data"]
            return {
                "id": data.get("id"),
                "name": nested.get("name"),
                "price": _price_amount(nested),
            }
        return data


class CatalogRecord(BaseModel):
    """
    One record of an externally fetched catalog snapshot.

    Accepts flat records ({"id", "type", "name", "item_id", "variations"})
    as well as POS catalog objects where the fields live under
    item_data / item_variation_data / modifier_data.
    """

    id: str
    type: str = ITEM
    name: Optional[str] = None
    description: Optional[str] = None
    item_id: Optional[str] = None
    price: Optional[int] = None
    variations: List[VariationRef] = []

    @model_validator(mode="before")
    @classmethod
    def _flatten(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        flat = dict(data)
        for key in ("item_data", "item_variation_data", "modifier_data"):
            nested = flat.pop(key, None)
            if isinstance(nested, dict):
                flat.setdefault("name", nested.get("name"))
                flat.setdefault("description", nested.get("description"))
                flat.setdefault("item_id", nested.get("item_id"))
                flat.setdefault("price", _price_amount(nested))
                flat.setdefault("variations", nested.get("variations") or [])
        if flat.get("type"):
            flat["type"] = str(flat["type"]).upper()
        return flat


class CatalogEntry(BaseModel):
    """Purchasable catalog item."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: Optional[str] = None
    variations: Tuple[VariationRef, ...] = ()

    @property
    def primary_variation_id(self) -> str:
        """First variation id, or the item's own id when it has none."""
        if self.variations:
            return self.variations[0].id
        return self.id


class ModifierEntry(BaseModel):
    """Add-on or customization that can be attached to a line item."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: Optional[int] = None


class ItemMatch(NamedTuple):
    """Result of a fuzzy item lookup."""

    entry: CatalogEntry
    variation_id: str
    score: int


class CatalogProvider(ABC):
    """Abstract base class for catalog snapshot providers."""

    @abstractmethod
    async def fetch_snapshot(self) -> List[Dict[str, Any]]:
        """Fetch the raw catalog records."""
        pass
