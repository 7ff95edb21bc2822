"""Catalog API endpoints."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from app.core.dependencies import get_catalog_repository
from app.services.catalog.index import CatalogSnapshotError
from app.services.catalog.repository import CatalogRepository

router = APIRouter()
logger = logging.getLogger(__name__)


class VariationResponse(BaseModel):
    """Variation response model."""
    id: str
    name: Optional[str] = None
    price: Optional[int] = None


class CatalogItemResponse(BaseModel):
    """Catalog item response model."""
    id: str
    name: str
    description: Optional[str] = None
    variations: List[VariationResponse] = []


class ModifierResponse(BaseModel):
    """Modifier response model."""
    id: str
    name: str
    price: Optional[int] = None


class CatalogResponse(BaseModel):
    """Catalog response model."""
    items: List[CatalogItemResponse]
    modifiers: List[ModifierResponse] = []
    menu_prompt: str = ""


class SearchResponse(BaseModel):
    """Catalog search response model."""
    items: List[CatalogItemResponse] = []
    modifiers: List[ModifierResponse] = []


def _item_response(item) -> CatalogItemResponse:
    return CatalogItemResponse(
        id=item.id,
        name=item.name,
        description=item.description,
        variations=[VariationResponse(**v.model_dump()) for v in item.variations],
    )


@router.get("/api/catalog", response_model=CatalogResponse)
async def get_catalog(
    request: Request,
    catalog_repository: CatalogRepository = Depends(get_catalog_repository),
):
    """Get the full catalog snapshot."""
    logger.info(
        f"[CATALOG] Request received - Client: {request.client.host if request.client else 'unknown'}"
    )

    try:
        index = await catalog_repository.get_index()
    except CatalogSnapshotError as e:
        logger.error(f"[CATALOG] Snapshot unusable - {e}", exc_info=True)
        raise HTTPException(status_code=502, detail=f"Catalog snapshot unusable: {e}")

    return CatalogResponse(
        items=[_item_response(item) for item in index.items],
        modifiers=[ModifierResponse(**m.model_dump()) for m in index.modifiers],
        menu_prompt=index.get_menu_text(),
    )


@router.get("/api/catalog/search", response_model=SearchResponse)
async def search_catalog(
    q: str,
    limit: int = 5,
    catalog_repository: CatalogRepository = Depends(get_catalog_repository),
):
    """Search items by name prefix and modifiers by name."""
    logger.debug(f"[CATALOG SEARCH] q='{q}', limit={limit}")
    index = await catalog_repository.get_index()
    return SearchResponse(
        items=[_item_response(item) for item in index.search_items(q, limit)],
        modifiers=[ModifierResponse(**m.model_dump()) for m in index.search_modifiers(q, limit)],
    )


@router.post("/api/catalog/refresh")
async def refresh_catalog(
    catalog_repository: CatalogRepository = Depends(get_catalog_repository),
):
    """Reload the catalog snapshot."""
    try:
        index = await catalog_repository.refresh()
    except CatalogSnapshotError as e:
        logger.error(f"[CATALOG] Refresh failed - {e}", exc_info=True)
        raise HTTPException(status_code=502, detail=f"Catalog snapshot unusable: {e}")
    return {"status": "refreshed", "items": len(index), "modifiers": len(index.modifiers)}
