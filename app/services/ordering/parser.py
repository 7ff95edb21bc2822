"""Incoming order payload parsing."""
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from app.services.ordering.extractor import TextOrderExtractor, extract_customer_name
from app.services.ordering.models import RawOrderLine

logger = logging.getLogger(__name__)

UNKNOWN_CUSTOMER = "Unknown Customer"


class IncomingOrder(BaseModel):
    """Incoming order normalized from any accepted webhook shape."""

    customer_name: str = UNKNOWN_CUSTOMER
    items: List[RawOrderLine] = []
    transcript: Optional[str] = None


class OrderParser:
    """Service for turning webhook payloads into raw order lines."""

    def __init__(self, extractor: Optional[TextOrderExtractor] = None):
        self.extractor = extractor or TextOrderExtractor()

    def parse_item(self, item: Any) -> Optional[RawOrderLine]:
        """
        Parse one structured item into a RawOrderLine.

        Args:
            item: Item dict with name, quantity, modifiers and optional
                catalog_object_id

        Returns:
            RawOrderLine, or None if the item has no name
        """
        if not isinstance(item, dict):
            return None

        name = str(item.get("name") or item.get("item_name") or "").strip()
        if not name:
            return None

        modifiers = item.get("modifiers") or []
        if isinstance(modifiers, str):
            modifiers = [modifiers]
        phrases = []
        for modifier in modifiers:
            if isinstance(modifier, dict):
                modifier = modifier.get("name") or ""
            phrase = str(modifier).strip()
            if phrase:
                phrases.append(phrase)

        return RawOrderLine(
            name=name,
            quantity=item.get("quantity", 1),
            modifier_phrases=phrases,
            catalog_object_id=item.get("catalog_object_id") or None,
        )

    def parse_items(self, items: Any) -> List[RawOrderLine]:
        """Parse a list of structured items, skipping unusable entries."""
        if not isinstance(items, list):
            return []
        lines = []
        for item in items:
            line = self.parse_item(item)
            if line is None:
                logger.debug(f"[ORDER PARSER] Skipping unusable item: {item!r}")
                continue
            lines.append(line)
        return lines

    def normalize_payload(self, payload: Dict[str, Any]) -> IncomingOrder:
        """
        Normalize a webhook body.

        Accepted shapes:
            - {"type": "elevenlabs-convai", "action": "order_confirmed",
               "data": {"customer_name", "items"}}
            - {"transcript", "name" or "customer_name", "items"?}
            - {"customer_name", "items"}
        Transcript bodies without items are run through the text extractor.
        """
        if payload.get("type") == "elevenlabs-convai" and payload.get("action") == "order_confirmed":
            data = payload.get("data") or {}
            return IncomingOrder(
                customer_name=data.get("customer_name") or UNKNOWN_CUSTOMER,
                items=self.parse_items(data.get("items")),
            )

        transcript = payload.get("transcript")
        if transcript:
            if isinstance(transcript, list):
                # Each turn ends a sentence so phrases never span turns
                transcript = ". ".join(
                    str(turn.get("message") or turn.get("text") or "") if isinstance(turn, dict) else str(turn)
                    for turn in transcript
                )
            items = self.parse_items(payload.get("items"))
            if not items:
                logger.info("[ORDER PARSER] No items supplied - extracting from transcript")
                items = self.extractor.extract(transcript)
            customer_name = (
                payload.get("name")
                or payload.get("customer_name")
                or extract_customer_name(transcript)
                or UNKNOWN_CUSTOMER
            )
            return IncomingOrder(customer_name=customer_name, items=items, transcript=transcript)

        return IncomingOrder(
            customer_name=payload.get("customer_name") or UNKNOWN_CUSTOMER,
            items=self.parse_items(payload.get("items")),
        )
