# /health endpoint
# movie_search/api/endpoints/health.py

import logging

from fastapi import APIRouter, Request, status
from pydantic import BaseModel

logger = logging.getLogger(__name__)
router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "ok"
    database: str = "up"


@router.get(
    "",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Perform a Health Check",
    response_description="Returns the health status of the API and its database.",
)
async def health_check(request: Request):
    """
    Reports whether the API is up and whether MongoDB answers a ping.
    """
    store = getattr(request.app.state, "store", None)
    db_up = store is not None and await store.ping()
    if not db_up:
        logger.warning("Health check: database is down")
    return HealthResponse(status="ok", database="up" if db_up else "down")
