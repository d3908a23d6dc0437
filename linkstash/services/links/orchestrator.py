"""Sequential batch orchestrator.

Processes candidate URLs strictly in input order, one at a time:
validate -> dedup-check -> extract -> build record -> accumulate.

The accumulator is seeded with the known records and grows as records are
accepted, so the duplicate check for URL *k* sees every record accepted from
URLs 1..k-1 in the same batch.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import httpx

from linkstash.models.link.record import LinkRecord
from linkstash.models.link.schemas import BatchResult, ItemOutcome, OutcomeStatus
from linkstash.services.links.factory import create_link_record
from linkstash.services.links.urls import is_duplicate, is_valid_url
from linkstash.workers.extractors.dispatch import extract_metadata

logger = logging.getLogger(__name__)

REASON_INVALID = "invalid URL"
REASON_DUPLICATE = "duplicate"


class BatchOrchestrator:
    """Drives one pass over a list of candidate URLs.

    Does not persist anything; the caller decides what to do with
    ``BatchResult.new_records``.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def run(
        self, candidate_urls: Iterable[str], known_records: Sequence[LinkRecord]
    ) -> BatchResult:
        accumulator: list[LinkRecord] = list(known_records)
        outcomes: list[ItemOutcome] = []

        for url in candidate_urls:
            try:
                outcome, record = await self._process_one(url, accumulator)
            except Exception as exc:
                logger.exception("Unexpected error while processing %s", url)
                outcome = ItemOutcome(
                    url=str(url),
                    status=OutcomeStatus.FAILED,
                    reason=str(exc) or type(exc).__name__,
                )
                record = None

            if record is not None:
                accumulator.append(record)
            outcomes.append(outcome)
            logger.info("%s: %s", outcome.label, url)

        return BatchResult.from_outcomes(outcomes, accumulator)

    async def _process_one(
        self, url: str, accumulator: Sequence[LinkRecord]
    ) -> tuple[ItemOutcome, LinkRecord | None]:
        """Resolve a single candidate against the current accumulator."""
        if not is_valid_url(url):
            return ItemOutcome(url=str(url), status=OutcomeStatus.SKIPPED, reason=REASON_INVALID), None

        if is_duplicate(url, [r.url for r in accumulator]):
            return ItemOutcome(url=str(url), status=OutcomeStatus.SKIPPED, reason=REASON_DUPLICATE), None

        metadata = await extract_metadata(url, self._client)
        record = create_link_record(url, metadata)
        return ItemOutcome(url=str(url), status=OutcomeStatus.ADDED), record
