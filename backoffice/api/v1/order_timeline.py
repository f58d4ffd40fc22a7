"""
Order Timeline API Endpoints - Document lineage and cross-type search.

Implements:
- GET /order-timeline/search - Search quotes, orders, work orders and expense orders
- GET /order-timeline/{entity_type}/{entity_id} - Lineage tree for any document

Authentication and permission checks are applied by the gateway in front of
this service.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from backoffice.config import get_config
from backoffice.models import get_db, get_session_factory
from backoffice.domain.services import OrderTimelineService
from backoffice.domain.exceptions import EntityNotFoundError, InvalidSearchLimitError

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Pydantic Models
# =============================================================================

class CamelModel(BaseModel):
    """Response model serialized with camelCase keys."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class TimelineNodeResponse(CamelModel):
    """A document node. Type-specific fields are present only on their node type."""
    id: str
    type: str
    number: str
    status: str
    client_name: str
    total: Optional[float]
    detail_path: str
    created_at: str
    ended_at: Optional[str]
    created_by_name: Optional[str] = None
    commercial_channel_name: Optional[str] = None
    pending_balance: Optional[float] = None
    advisor_name: Optional[str] = None
    designer_name: Optional[str] = None
    authorized_to_name: Optional[str] = None
    responsible_name: Optional[str] = None


class TimelineEdgeResponse(CamelModel):
    source: str
    target: str


class OrderTreeResponse(CamelModel):
    """Lineage tree with root and focused node ids."""
    nodes: List[TimelineNodeResponse]
    edges: List[TimelineEdgeResponse]
    root_id: str
    focused_id: str


class SearchRowResponse(CamelModel):
    id: str
    type: str
    number: str
    status: str
    client_name: str
    entity_type: str


class SearchResultsResponse(CamelModel):
    """Search hits grouped by document type."""
    quotes: List[SearchRowResponse]
    orders: List[SearchRowResponse]
    work_orders: List[SearchRowResponse]
    expense_orders: List[SearchRowResponse]


# =============================================================================
# Endpoints
# =============================================================================

@router.get(
    "/search",
    response_model=SearchResultsResponse,
    summary="Search orders across all document types",
    description="Match document number or client name; the limit applies per document type"
)
def search_documents(
    q: str = Query("", description="Search term (document number or client name)"),
    limit: Optional[int] = Query(
        None, ge=1, le=get_config().search_max_limit,
        description="Max results per type (default from configuration)"
    ),
    db: Session = Depends(get_db),
    session_factory=Depends(get_session_factory)
):
    """Search quotes, orders, work orders and expense orders."""
    service = OrderTimelineService(db, session_factory)

    try:
        return service.search_orders(q, limit).to_dict()
    except InvalidSearchLimitError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.message
        )


@router.get(
    "/{entity_type}/{entity_id}",
    response_model=OrderTreeResponse,
    response_model_exclude_unset=True,
    summary="Get the complete order relationship tree",
    description="entity_type is one of quote, order, work-order, expense-order"
)
def get_order_tree(
    entity_type: str,
    entity_id: str,
    db: Session = Depends(get_db)
):
    """
    Get the lineage tree for any document.

    Quotes without an order and expense orders without a work order
    return a single-node tree.
    """
    service = OrderTimelineService(db)

    try:
        return service.get_order_tree(entity_type, entity_id).to_dict()
    except EntityNotFoundError as e:
        logger.info(f"Lineage lookup failed: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )
