"""FastAPI dependencies."""
from functools import lru_cache

from app.core.config import settings
from app.services.catalog.in_memory_catalog import InMemoryCatalogProvider
from app.services.catalog.repository import CatalogRepository
from app.services.ordering.builder import OrderRequestBuilder
from app.services.ordering.parser import OrderParser
from app.services.ordering.pipeline import OrderPipeline
from app.services.ordering.resolver import CatalogResolver


@lru_cache
def get_catalog_repository() -> CatalogRepository:
    """Get the shared catalog repository."""
    return CatalogRepository(provider=InMemoryCatalogProvider(settings.catalog_file))


def get_order_pipeline() -> OrderPipeline:
    """Get an order pipeline configured from settings."""
    return OrderPipeline(
        resolver=CatalogResolver(
            default_price_amount=settings.default_price_amount,
            currency=settings.currency,
        ),
        builder=OrderRequestBuilder(
            source_name=f"{settings.restaurant_name} {settings.order_source_name}"
        ),
    )


def get_order_parser() -> OrderParser:
    """Get an incoming order parser."""
    return OrderParser()
