from __future__ import annotations

import uuid
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

import linkstash.workers.fetcher as fetcher_module
from linkstash.core.config import settings
from linkstash.main import app
from linkstash.models.link.record import LinkRecord, MetadataResult, SourceTag
from linkstash.repositories.inputs.repository import InputRepository
from linkstash.repositories.links.repository import LinkRepository


def make_record(url: str, **kwargs) -> LinkRecord:
    defaults = dict(
        id=str(uuid.uuid4()),
        url=url,
        title=url,
        description="",
        image="",
        author="",
        added="2026-01-01T00:00:00.000Z",
        source=SourceTag.WEB,
    )
    return LinkRecord(**{**defaults, **kwargs})


@pytest.fixture
async def http_client():
    async with httpx.AsyncClient() as c:
        yield c


@pytest.fixture
def stub_extract():
    """Replace network extraction with a deterministic title per URL."""
    with patch(
        "linkstash.services.links.orchestrator.extract_metadata",
        new_callable=AsyncMock,
    ) as mock_extract:
        mock_extract.side_effect = lambda url, client: MetadataResult(title=f"Title of {url}")
        yield mock_extract


@pytest.fixture
def storage(tmp_path, monkeypatch):
    """Point the configured input and links files at a temp directory."""
    monkeypatch.setattr(settings, "links_path", tmp_path / "links.json")
    monkeypatch.setattr(settings, "input_path", tmp_path / "input.txt")
    return tmp_path


@pytest.fixture
def links_repo(storage) -> LinkRepository:
    return LinkRepository.from_settings()


@pytest.fixture
def inputs_repo(storage) -> InputRepository:
    return InputRepository.from_settings()


@pytest.fixture
def client(storage):
    """TestClient over temp storage; the shared HTTP client is reset around each test."""
    fetcher_module._http_client = None
    with TestClient(app) as c:
        yield c
    fetcher_module._http_client = None
