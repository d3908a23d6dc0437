from __future__ import annotations

import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from linkstash.models.link.record import LinkRecord, MetadataResult
from linkstash.services.links.urls import classify_source, parse_absolute_url


def _timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _clean(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def create_link_record(
    url: str, metadata: MetadataResult | Mapping[str, Any] | None = None
) -> LinkRecord:
    """Build a new :class:`LinkRecord` for *url*.

    All string fields are trimmed.  Missing or ``None`` metadata fields become
    ``""``, except ``title`` which falls back to the trimmed URL.

    Raises:
        InvalidUrlError: if *url* is empty, not a string, or not absolute.
    """
    parse_absolute_url(url)
    clean_url = url.strip()

    if isinstance(metadata, MetadataResult):
        fields: Mapping[str, Any] = metadata.model_dump()
    else:
        fields = metadata or {}

    return LinkRecord(
        id=str(uuid.uuid4()),
        url=clean_url,
        title=_clean(fields.get("title")) or clean_url,
        description=_clean(fields.get("description")),
        image=_clean(fields.get("image")),
        author=_clean(fields.get("author")),
        added=_timestamp(),
        source=classify_source(clean_url),
    )
