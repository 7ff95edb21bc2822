"""Order API endpoints."""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.core.config import settings
from app.core.dependencies import get_catalog_repository, get_order_parser, get_order_pipeline
from app.services.catalog.index import CatalogSnapshotError
from app.services.catalog.repository import CatalogRepository
from app.services.ordering.errors import EmptyOrderError
from app.services.ordering.extractor import extract_customer_name
from app.services.ordering.models import CanonicalOrderLine
from app.services.ordering.parser import OrderParser
from app.services.ordering.pipeline import OrderPipeline
from app.services.ordering.validator import OrderValidator

router = APIRouter()
logger = logging.getLogger(__name__)


class ExtractRequest(BaseModel):
    """Conversation text to extract an order from."""
    text: str


class ExtractResponse(BaseModel):
    """Extracted order lines."""
    customer_name: Optional[str] = None
    lines: List[CanonicalOrderLine] = []


@router.post("/api/orders/extract", response_model=ExtractResponse)
async def extract_order(
    body: ExtractRequest,
    pipeline: OrderPipeline = Depends(get_order_pipeline),
):
    """Extract order lines from conversation text without building an order."""
    lines = pipeline.lines_from_text(body.text)
    logger.info(f"[ORDERS EXTRACT] Extracted {len(lines)} lines")
    return ExtractResponse(customer_name=extract_customer_name(body.text), lines=lines)


@router.post("/api/orders")
async def create_order(
    request: Request,
    payload: Dict[str, Any] = Body(...),
    catalog_repository: CatalogRepository = Depends(get_catalog_repository),
    parser: OrderParser = Depends(get_order_parser),
    pipeline: OrderPipeline = Depends(get_order_pipeline),
):
    """Build an order request from a voice-agent webhook body."""
    logger.info(
        f"[ORDERS] Request received - Client: {request.client.host if request.client else 'unknown'}"
    )

    incoming = parser.normalize_payload(payload)
    logger.info(
        f"[ORDERS] Customer: {incoming.customer_name}, {len(incoming.items)} raw items"
    )

    try:
        index = await catalog_repository.get_index()
        lines = pipeline.lines_from_items(incoming.items)
        order_request = pipeline.prepare(
            lines,
            index,
            location_id=settings.square_location_id,
            customer_name=incoming.customer_name,
        )
    except EmptyOrderError as e:
        logger.info(f"[ORDERS] Not building order - {e}")
        return JSONResponse(status_code=400, content={"success": False, "error": str(e)})
    except CatalogSnapshotError as e:
        logger.error(f"[ORDERS] Catalog snapshot unusable - {e}", exc_info=True)
        raise HTTPException(status_code=502, detail=f"Catalog snapshot unusable: {e}")
    except Exception as e:
        logger.error(
            f"[ORDERS] Error building order - Error: {type(e).__name__}: {str(e)}",
            exc_info=True,
        )
        raise HTTPException(status_code=500, detail=f"Error building order: {str(e)}")

    return {
        "success": True,
        "order_request": order_request.to_payload(),
        "needs_review": OrderValidator().needs_review(order_request.line_items, index),
    }
