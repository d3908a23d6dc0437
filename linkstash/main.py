from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from linkstash.api.router import router
from linkstash.core.logging import configure_logging
from linkstash.models.common import HealthResponse
from linkstash.repositories.links.repository import LinkRepository
from linkstash.workers.fetcher import close_http_client

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # ── Startup ──────────────────────────────────────────────────────
    LinkRepository.from_settings().ensure_storage()
    yield
    # ── Shutdown ─────────────────────────────────────────────────────
    await close_http_client()


app = FastAPI(
    title="LinkStash",
    description="Collects link metadata into an ordered JSON collection.",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router)


@app.get("/health", tags=["health"], response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok")
