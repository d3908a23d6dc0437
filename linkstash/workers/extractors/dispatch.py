from __future__ import annotations

import httpx

from linkstash.models.link.record import MetadataResult, SourceTag
from linkstash.services.links.urls import classify_source
from linkstash.workers.extractors.base import BaseExtractor
from linkstash.workers.extractors.twitter import TwitterExtractor
from linkstash.workers.extractors.web import WebExtractor

# Sources without an entry use the generic web strategy.
STRATEGIES: dict[SourceTag, type[BaseExtractor]] = {
    SourceTag.TWITTER: TwitterExtractor,
}


def extractor_for(url: str, client: httpx.AsyncClient) -> BaseExtractor:
    strategy = STRATEGIES.get(classify_source(url), WebExtractor)
    return strategy(client)


async def extract_metadata(url: str, client: httpx.AsyncClient) -> MetadataResult:
    """Extract metadata for *url* with the strategy its source calls for.

    Never raises; failures come back as ``MetadataResult.fallback(url)``.
    """
    return await extractor_for(url, client).extract(url)
