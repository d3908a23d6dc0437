from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from linkstash.core.errors import PersistenceError
from linkstash.models.common import ErrorResponse
from linkstash.models.link.record import LinkRecord
from linkstash.models.link.schemas import BatchRequest, BatchResponse
from linkstash.repositories.inputs.repository import InputRepository
from linkstash.repositories.links.repository import LinkRepository
from linkstash.services.links.service import LinkService
from linkstash.workers.fetcher import get_http_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/links", tags=["links"])


# ---------------------------------------------------------------------------
# Dependency
# ---------------------------------------------------------------------------


def _get_service() -> LinkService:
    """FastAPI dependency that builds a ``LinkService`` for each request."""
    return LinkService(
        LinkRepository.from_settings(),
        InputRepository.from_settings(),
        get_http_client(),
    )


# ---------------------------------------------------------------------------
# POST /links
# ---------------------------------------------------------------------------


@router.post(
    "",
    status_code=200,
    response_model=BatchResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Ingest a batch of URLs",
)
async def post_links(
    request: BatchRequest,
    service: LinkService = Depends(_get_service),
) -> BatchResponse:
    """Extract metadata for each URL and append new links to the collection.

    URLs are processed sequentially in the order given.  Invalid and
    duplicate URLs are reported per item, not rejected.

    - **200**: batch processed; see per-item ``outcomes``
    - **422**: malformed request body
    - **500**: the stored collection could not be read or written
    """
    try:
        result = await service.ingest(request.urls)
    except PersistenceError as exc:
        logger.error("POST /links persistence error: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc))
    return BatchResponse.from_result(result)


# ---------------------------------------------------------------------------
# GET /links
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=list[LinkRecord],
    responses={500: {"model": ErrorResponse}},
    summary="List stored links",
)
async def get_links(
    service: LinkService = Depends(_get_service),
) -> list[LinkRecord]:
    """Return the stored collection in insertion order.

    - **200**: collection returned (possibly empty)
    - **500**: stored data is malformed or unreadable
    """
    try:
        return service.list_links()
    except PersistenceError as exc:
        logger.error("GET /links persistence error: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc))
