from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx

from linkstash.models.link.record import MetadataResult
from linkstash.workers.fetcher import FetchError

logger = logging.getLogger(__name__)


class BaseExtractor(ABC):
    """
    Contract for all extraction strategies:
    input: url
    output: MetadataResult, always populated

    Subclasses implement ``_extract`` and may raise freely; ``extract``
    turns every failure into ``MetadataResult.fallback(url)``.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def extract(self, url: str) -> MetadataResult:
        try:
            return await self._extract(url)
        except FetchError as exc:
            logger.warning("Extraction degraded for %s: %s", url, exc)
        except Exception as exc:
            logger.warning(
                "Extraction degraded for %s: unexpected %s: %s",
                url,
                type(exc).__name__,
                exc,
            )
        return MetadataResult.fallback(url)

    @abstractmethod
    async def _extract(self, url: str) -> MetadataResult:
        raise NotImplementedError
