from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlsplit

from linkstash.core.config import settings
from linkstash.models.link.record import MetadataResult
from linkstash.workers.extractors.base import BaseExtractor
from linkstash.workers.fetcher import fetch

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 100
ELLIPSIS = "..."


def to_mirror_url(url: str) -> str:
    """Rewrite a twitter.com / x.com URL onto the fxtwitter API host."""
    return f"{settings.twitter_api_base.rstrip('/')}{urlsplit(url).path}"


def truncate_title(text: str) -> str:
    if len(text) > TITLE_MAX_LENGTH:
        return text[: TITLE_MAX_LENGTH - len(ELLIPSIS)] + ELLIPSIS
    return text


def _first(items: Any) -> dict[str, Any]:
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return {}


class TwitterExtractor(BaseExtractor):
    """
    Resolves posts through the fxtwitter JSON mirror instead of scraping
    twitter.com, which serves no usable markup to bots.

    Extracts:
    - title: post text, truncated
    - description: full post text
    - author: display name, else handle
    - image: first photo, else first video thumbnail
    """

    async def _extract(self, url: str) -> MetadataResult:
        api_url = to_mirror_url(url)
        response = await fetch(
            self._client,
            api_url,
            headers={"User-Agent": settings.twitter_user_agent},
        )

        if not response.is_success:
            logger.warning("fxtwitter returned %s for %s.", response.status_code, url)
            return MetadataResult.fallback(url)

        payload = response.json()
        tweet = payload.get("tweet") if isinstance(payload, dict) else None
        if not isinstance(tweet, dict):
            logger.warning("fxtwitter payload for %s has no tweet object.", url)
            return MetadataResult.fallback(url)

        text = tweet.get("text") or ""
        author = tweet.get("author") or {}
        media = tweet.get("media") or {}

        if media.get("photos"):
            image = _first(media["photos"]).get("url") or ""
        else:
            image = _first(media.get("videos")).get("thumbnail_url") or ""

        logger.info("Extracted tweet: url=%s chars=%d", url, len(text))

        return MetadataResult(
            title=truncate_title(text) or url,
            description=text,
            author=author.get("name") or author.get("screen_name") or "",
            image=image,
        )
