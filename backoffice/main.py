"""
Main FastAPI Application for the print backoffice lineage service.
Serves the order timeline REST endpoints.
"""
import logging

from fastapi import FastAPI

from backoffice import __version__
from backoffice.config import get_config
from backoffice.models import init_db, get_db, get_session_factory
from backoffice.api.v1 import api_router as v1_router

logging.basicConfig(
    level=get_config().log_level,
    format=get_config().log_format
)
logger = logging.getLogger(__name__)


# Initialize FastAPI app
app = FastAPI(
    title="Print Backoffice - Order Timeline",
    description="Document lineage (Quote -> Order -> Work Order -> Expense Order) and cross-type search",
    version=__version__
)

app.include_router(v1_router)


# Initialize database on startup
@app.on_event("startup")
async def startup_event():
    init_db()
    logger.info("Order timeline service started")


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok", "version": __version__}


__all__ = ['app', 'get_db', 'get_session_factory']


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
