from __future__ import annotations

import logging

from linkstash.core.errors import InputReadError
from linkstash.repositories.base import BaseFileRepository

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"


class InputRepository(BaseFileRepository):
    """Plain-text batch file, one URL per line."""

    SETTINGS_FIELD = "input_path"

    def read_urls(self) -> list[str]:
        """Return the trimmed URLs in file order.

        Blank lines and lines starting with ``#`` are dropped.  A missing
        file yields no URLs.

        Raises:
            InputReadError: if the file exists but cannot be read.
        """
        try:
            content = self._read_text()
        except (OSError, UnicodeDecodeError) as exc:
            raise InputReadError(f"Failed to read {self.path}: {exc}") from exc

        if content is None:
            return []

        lines = (line.strip() for line in content.splitlines())
        return [line for line in lines if line and not line.startswith(COMMENT_PREFIX)]

    def clear(self) -> None:
        """Truncate the input file.  Failures are logged, never raised."""
        try:
            self.path.write_text("", encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to clear %s: %s", self.path, exc)
