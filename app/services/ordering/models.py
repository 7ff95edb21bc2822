"""Order models."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.services.ordering.numbers import coerce_quantity


def normalize_name(name: str) -> str:
    """Key used to group and compare free-text item names."""
    return name.strip().casefold()


class RawOrderLine(BaseModel):
    """Candidate order line as captured from speech or an incoming payload."""

    model_config = ConfigDict(frozen=True)

    name: str
    quantity: int = 1
    modifier_phrases: List[str] = []
    catalog_object_id: Optional[str] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def _positive_quantity(cls, value: Any) -> int:
        return coerce_quantity(value)


class CanonicalOrderLine(BaseModel):
    """One merged order line per distinct normalized name."""

    model_config = ConfigDict(frozen=True)

    normalized_name: str
    display_name: str
    quantity: int = 1
    modifier_phrases: List[str] = []
    catalog_object_id: Optional[str] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def _positive_quantity(cls, value: Any) -> int:
        return coerce_quantity(value)


class Money(BaseModel):
    """Amount in minor currency units."""

    model_config = ConfigDict(frozen=True)

    amount: int
    currency: str = "USD"


class ResolvedOrderLine(BaseModel):
    """
    Line item ready for the order request.

    Either references a catalog variation (catalog_object_id set) or is a
    custom fallback line carrying the spoken name and a placeholder price.
    """

    model_config = ConfigDict(frozen=True)

    quantity: int = 1
    catalog_object_id: Optional[str] = None
    modifier_ids: List[str] = []
    name: Optional[str] = None
    base_price: Optional[Money] = None
    note: str = ""

    @field_validator("quantity", mode="before")
    @classmethod
    def _positive_quantity(cls, value: Any) -> int:
        return coerce_quantity(value)

    @property
    def is_fallback(self) -> bool:
        """True when no catalog match was found for this line."""
        return self.catalog_object_id is None

    def to_payload(self) -> Dict[str, Any]:
        """Render as a create-order line item."""
        payload: Dict[str, Any] = {"quantity": str(self.quantity)}
        if self.is_fallback:
            payload["name"] = self.name
            if self.base_price is not None:
                payload["base_price_money"] = {
                    "amount": self.base_price.amount,
                    "currency": self.base_price.currency,
                }
        else:
            payload["catalog_object_id"] = self.catalog_object_id
            if self.modifier_ids:
                payload["modifiers"] = [
                    {"catalog_object_id": modifier_id} for modifier_id in self.modifier_ids
                ]
        if self.note:
            payload["note"] = self.note
        return payload


class OrderRequest(BaseModel):
    """Order ready to be submitted to the point-of-sale."""

    model_config = ConfigDict(frozen=True)

    location_id: str
    line_items: List[ResolvedOrderLine] = Field(min_length=1)
    idempotency_key: str
    customer_name: Optional[str] = None
    source_name: str = "Voice Ordering"

    @property
    def customer_note(self) -> str:
        return f"Voice order for {self.customer_name or 'Customer'}"

    def to_payload(self) -> Dict[str, Any]:
        """Render the create-order request body."""
        return {
            "idempotency_key": self.idempotency_key,
            "order": {
                "location_id": self.location_id,
                "line_items": [line.to_payload() for line in self.line_items],
                "state": "OPEN",
                "customer_note": self.customer_note,
                "source": {"name": self.source_name},
            },
        }
