from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx

from linkstash.models.link.record import LinkRecord
from linkstash.models.link.schemas import BatchResult
from linkstash.repositories.inputs.repository import InputRepository
from linkstash.repositories.links.repository import LinkRepository
from linkstash.services.links.orchestrator import BatchOrchestrator

logger = logging.getLogger(__name__)


class LinkService:
    """Business logic tying the orchestrator to the stored collection."""

    def __init__(
        self,
        links: LinkRepository,
        inputs: InputRepository,
        client: httpx.AsyncClient,
    ) -> None:
        self._links = links
        self._inputs = inputs
        self._client = client

    def list_links(self) -> list[LinkRecord]:
        """Return the stored collection in insertion order."""
        return self._links.load()

    async def ingest(self, urls: Sequence[str]) -> BatchResult:
        """Run one batch over *urls* and persist the result.

        The collection is written only if at least one record was added.

        Raises:
            PersistenceError: if the collection cannot be loaded or saved.
                Nothing from the batch is saved in that case.
        """
        known = self._links.load()
        logger.info("Processing %d URL(s)...", len(urls))

        result = await BatchOrchestrator(self._client).run(urls, known)

        if result.added > 0:
            self._links.save(result.new_records)
        logger.info("Summary: %s", result.summary)
        return result

    async def process(self) -> BatchResult:
        """Ingest every URL in the input file, then clear it.

        Raises:
            InputReadError: if the input file cannot be read.
            PersistenceError: propagated from :meth:`ingest`.
        """
        urls = self._inputs.read_urls()
        if not urls:
            logger.info("No URLs to process")
            return BatchResult()

        result = await self.ingest(urls)
        self._inputs.clear()
        return result
