"""Order pipeline: text or items in, order request out."""
import logging
from typing import List, Optional, Sequence

from app.services.catalog.index import CatalogIndex
from app.services.ordering.aggregator import OrderAggregator
from app.services.ordering.builder import OrderRequestBuilder
from app.services.ordering.errors import EmptyOrderError
from app.services.ordering.extractor import TextOrderExtractor
from app.services.ordering.models import CanonicalOrderLine, OrderRequest, RawOrderLine
from app.services.ordering.resolver import CatalogResolver

logger = logging.getLogger(__name__)


class OrderPipeline:
    """Wires extraction, aggregation, resolution and request building."""

    def __init__(
        self,
        extractor: Optional[TextOrderExtractor] = None,
        aggregator: Optional[OrderAggregator] = None,
        resolver: Optional[CatalogResolver] = None,
        builder: Optional[OrderRequestBuilder] = None,
    ):
        self.extractor = extractor or TextOrderExtractor()
        self.aggregator = aggregator or OrderAggregator()
        self.resolver = resolver or CatalogResolver()
        self.builder = builder or OrderRequestBuilder()

    def lines_from_text(self, conversation_text: str) -> List[CanonicalOrderLine]:
        """Extract and merge order lines from conversation text."""
        return self.aggregator.aggregate(self.extractor.extract(conversation_text))

    def lines_from_items(self, items: Sequence[RawOrderLine]) -> List[CanonicalOrderLine]:
        """Merge already-structured order lines."""
        return self.aggregator.aggregate(items)

    def prepare(
        self,
        lines: Sequence[CanonicalOrderLine],
        index: CatalogIndex,
        location_id: str,
        customer_name: Optional[str] = None,
    ) -> OrderRequest:
        """
        Resolve canonical lines against one catalog snapshot and build the request.

        Raises:
            EmptyOrderError: if there is nothing to order
        """
        if not lines:
            logger.info("[PIPELINE] Nothing to order - not building a request")
            raise EmptyOrderError()

        resolved = self.resolver.resolve_all(lines, index)
        fallbacks = sum(1 for line in resolved if line.is_fallback)
        logger.info(
            f"[PIPELINE] Resolved {len(resolved)} lines "
            f"({len(resolved) - fallbacks} catalog, {fallbacks} custom)"
        )
        return self.builder.build(resolved, customer_name, location_id)
