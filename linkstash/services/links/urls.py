"""URL validation, normalisation, classification and duplicate detection.

``normalize_url`` produces the comparison key used for deduplication.  Two
URLs are equivalent when they differ only by:

- letter case of the scheme or host,
- an explicit default port (``:80`` on http, ``:443`` on https),
- a single trailing ``/`` on a non-root path,
- the order of query parameters,
- the fragment.

Path case, scheme and query values are significant.
"""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import SplitResult, parse_qsl, urlencode, urlsplit

from linkstash.core.errors import InvalidUrlError
from linkstash.models.link.record import SourceTag

_DEFAULT_PORTS = {"http": 80, "https": 443}
_FETCHABLE_SCHEMES = frozenset(_DEFAULT_PORTS)

# Checked in order; the first rule whose host fragment appears wins.
_SOURCE_RULES: tuple[tuple[SourceTag, tuple[str, ...]], ...] = (
    (SourceTag.TWITTER, ("twitter.com", "x.com")),
    (SourceTag.YOUTUBE, ("youtube.com", "youtu.be")),
    (SourceTag.GITHUB, ("github.com",)),
)


def parse_absolute_url(url: object) -> SplitResult:
    """Split *url* into components, requiring a scheme and a host.

    Raises:
        InvalidUrlError: if *url* is not a non-empty string holding an
            absolute URL.
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidUrlError("URL must be a non-empty string")

    candidate = url.strip()
    if any(ch.isspace() for ch in candidate):
        raise InvalidUrlError(f"Invalid URL: {url}")
    try:
        parts = urlsplit(candidate)
        parts.port  # noqa: B018 - raises ValueError on a malformed port
    except ValueError as exc:
        raise InvalidUrlError(f"Invalid URL: {url}") from exc

    if not parts.scheme or not parts.hostname:
        raise InvalidUrlError(f"Invalid URL: {url}")
    return parts


def is_valid_url(url: object) -> bool:
    """True for absolute ``http``/``https`` URLs."""
    try:
        parts = parse_absolute_url(url)
    except InvalidUrlError:
        return False
    return parts.scheme.lower() in _FETCHABLE_SCHEMES


def normalize_url(url: object) -> str:
    """Return the comparison key for *url*.

    Raises:
        InvalidUrlError: if *url* is empty, not a string, or not absolute.
    """
    parts = parse_absolute_url(url)
    scheme = parts.scheme.lower()
    host = parts.hostname.lower()
    if ":" in host:
        host = f"[{host}]"

    normalized = f"{scheme}://{host}"
    if parts.port is not None and parts.port != _DEFAULT_PORTS.get(scheme):
        normalized += f":{parts.port}"

    path = parts.path or "/"
    # Exactly one trailing separator; "/p//" becomes "/p/".
    if len(path) > 1 and path.endswith("/"):
        path = path[:-1]
    normalized += path

    if parts.query:
        pairs = parse_qsl(parts.query, keep_blank_values=True)
        pairs.sort(key=lambda pair: pair[0])
        query = urlencode(pairs)
        if query:
            normalized += f"?{query}"

    return normalized


def classify_source(url: object) -> SourceTag:
    """Map *url* to a :class:`SourceTag`.  Never raises."""
    if not isinstance(url, str):
        return SourceTag.WEB
    try:
        host = (urlsplit(url.strip()).hostname or "").lower()
    except ValueError:
        return SourceTag.WEB

    for tag, fragments in _SOURCE_RULES:
        if any(fragment in host for fragment in fragments):
            return tag
    return SourceTag.WEB


def is_duplicate(url: object, known_urls: Iterable[str] | None) -> bool:
    """True if *url* normalises to the same key as any of *known_urls*.

    Known URLs that cannot be normalised never match.  A candidate that
    cannot be normalised is reported as not a duplicate; rejecting it is the
    caller's job.
    """
    if not known_urls:
        return False
    try:
        key = normalize_url(url)
    except InvalidUrlError:
        return False

    for known in known_urls:
        try:
            if normalize_url(known) == key:
                return True
        except InvalidUrlError:
            continue
    return False
