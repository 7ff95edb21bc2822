"""Order request assembly."""
import logging
import uuid
from typing import Optional, Sequence

from app.services.ordering.errors import EmptyOrderError
from app.services.ordering.models import OrderRequest, ResolvedOrderLine

logger = logging.getLogger(__name__)


def new_idempotency_key() -> str:
    """Random key, unique across concurrent builds."""
    return str(uuid.uuid4())


class OrderRequestBuilder:
    """Assembles resolved lines into an order request."""

    def __init__(self, source_name: str = "Voice Ordering"):
        self.source_name = source_name

    def build(
        self,
        resolved_lines: Sequence[ResolvedOrderLine],
        customer_name: Optional[str],
        location_id: str,
    ) -> OrderRequest:
        """
        Build an order request with a fresh idempotency key.

        Raises:
            EmptyOrderError: if there are no lines to order
        """
        if not resolved_lines:
            raise EmptyOrderError()

        request = OrderRequest(
            location_id=location_id,
            line_items=list(resolved_lines),
            idempotency_key=new_idempotency_key(),
            customer_name=customer_name,
            source_name=self.source_name,
        )
        logger.info(
            f"[ORDER BUILDER] Built order {request.idempotency_key} - "
            f"{len(request.line_items)} lines for {customer_name or 'unknown customer'}"
        )
        return request
