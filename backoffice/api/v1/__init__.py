"""
API v1 - REST endpoints for the document lineage.

- Order timeline endpoints (lineage tree, cross-type search)
"""
from fastapi import APIRouter

from .order_timeline import router as order_timeline_router

api_router = APIRouter()

api_router.include_router(order_timeline_router, prefix="/order-timeline", tags=["Order Timeline"])
