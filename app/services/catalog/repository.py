"""Catalog repository."""
import logging
from typing import Optional

from app.services.catalog.base import CatalogProvider
from app.services.catalog.index import CatalogIndex

logger = logging.getLogger(__name__)


class CatalogRepository:
    """Holds the current catalog snapshot."""

    def __init__(self, provider: CatalogProvider):
        self.provider = provider
        self._index: Optional[CatalogIndex] = None

    async def refresh(self) -> CatalogIndex:
        """
        Fetch a fresh snapshot and replace the current index.

        The previous index is left untouched so resolutions already holding
        it keep working against a consistent snapshot.
        """
        records = await self.provider.fetch_snapshot()
        index = CatalogIndex.build(records)
        self._index = index
        logger.info(f"[CATALOG] Snapshot refreshed - {len(index)} items")
        return index

    async def get_index(self) -> CatalogIndex:
        """Get the current index, loading it on first use."""
        index = self._index
        if index is None:
            index = await self.refresh()
        return index

    @property
    def is_loaded(self) -> bool:
        """Whether a snapshot has been loaded yet."""
        return self._index is not None
