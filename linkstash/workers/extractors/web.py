from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from linkstash.core.config import settings
from linkstash.models.link.record import MetadataResult
from linkstash.workers.extractors.base import BaseExtractor
from linkstash.workers.fetcher import fetch

logger = logging.getLogger(__name__)

# Candidate selectors per field, highest priority first.
CASCADES: dict[str, tuple[str, ...]] = {
    "title": (
        'meta[property="og:title"]',
        'meta[name="twitter:title"]',
        "title",
    ),
    "description": (
        'meta[property="og:description"]',
        'meta[name="twitter:description"]',
        'meta[name="description"]',
    ),
    "image": (
        'meta[property="og:image"]',
        'meta[name="twitter:image"]',
    ),
    "author": (
        'meta[property="og:article:author"]',
        'meta[name="author"]',
        'meta[property="article:author"]',
    ),
}


def first_match(soup: BeautifulSoup, selectors: tuple[str, ...]) -> str:
    """Return the first non-blank candidate value, trimmed, or ``""``."""
    for selector in selectors:
        tag = soup.select_one(selector)
        if tag is None:
            continue
        value = tag.get("content") if tag.name == "meta" else tag.get_text()
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def parse_metadata(html: str, url: str) -> MetadataResult:
    soup = BeautifulSoup(html, "lxml")
    fields = {name: first_match(soup, selectors) for name, selectors in CASCADES.items()}
    fields["title"] = fields["title"] or url
    return MetadataResult(**fields)


class WebExtractor(BaseExtractor):
    """
    Reads Open Graph / Twitter card / plain HTML meta tags.
    Anything that is not a successful HTML response degrades to the default.
    """

    async def _extract(self, url: str) -> MetadataResult:
        response = await fetch(
            self._client,
            url,
            headers={"User-Agent": settings.web_user_agent},
            follow_redirects=True,
        )

        if not response.is_success:
            logger.warning("%s returned %s.", url, response.status_code)
            return MetadataResult.fallback(url)

        content_type = response.headers.get("content-type", "")
        if "text/html" not in content_type.lower():
            logger.warning("%s is not HTML (content-type=%r).", url, content_type)
            return MetadataResult.fallback(url)

        result = parse_metadata(response.text, url)
        logger.info("Extracted page metadata: url=%s title=%r", url, result.title)
        return result
