from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class SourceTag(str, Enum):
    """Closed set of sources a link can be classified as."""

    TWITTER = "twitter"
    YOUTUBE = "youtube"
    GITHUB = "github"
    WEB = "web"


class MetadataResult(BaseModel):
    """Metadata resolved for a single URL by an extraction strategy.

    Always fully populated; extraction failures are expressed through
    :meth:`fallback` rather than through an error channel.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    description: str = ""
    image: str = ""
    author: str = ""

    @classmethod
    def fallback(cls, url: str) -> MetadataResult:
        """The degraded result used whenever extraction cannot complete."""
        return cls(title=url)


class LinkRecord(BaseModel):
    """A stored link.  Never mutated once created.

    Field order matches the on-disk JSON layout.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    url: str
    title: str = ""
    description: str = ""
    image: str = ""
    author: str = ""
    added: str
    source: SourceTag
