from __future__ import annotations

import json
import logging

from pydantic import TypeAdapter, ValidationError

from linkstash.core.errors import PersistenceError
from linkstash.models.link.record import LinkRecord
from linkstash.repositories.base import BaseFileRepository

logger = logging.getLogger(__name__)

_RECORDS = TypeAdapter(list[LinkRecord])


class LinkRepository(BaseFileRepository):
    """JSON array file holding every stored :class:`LinkRecord`.

    Array order is insertion order and is preserved on both read and write.
    """

    SETTINGS_FIELD = "links_path"

    def load(self) -> list[LinkRecord]:
        """Read the stored collection.

        A missing, empty or whitespace-only file is an empty collection.

        Raises:
            PersistenceError: if the file cannot be read, is not valid JSON,
                is not an array, or holds a malformed record.
        """
        try:
            content = self._read_text()
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"Failed to read {self.path}: {exc}") from exc

        if content is None or not content.strip():
            return []

        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Invalid JSON in {self.path}: {exc}") from exc

        if not isinstance(data, list):
            raise PersistenceError(f"{self.path} must contain an array")

        try:
            records = _RECORDS.validate_python(data)
        except ValidationError as exc:
            raise PersistenceError(f"Malformed link record in {self.path}: {exc}") from exc

        logger.debug("Loaded %d link(s) from %s", len(records), self.path)
        return records

    def save(self, records: list[LinkRecord]) -> None:
        """Overwrite the file with *records* as a pretty-printed JSON array.

        Raises:
            PersistenceError: on any I/O failure.
        """
        try:
            self.ensure_storage()
            self.path.write_bytes(_RECORDS.dump_json(records, indent=2))
        except OSError as exc:
            logger.exception("Writing %s failed", self.path)
            raise PersistenceError(f"Failed to write {self.path}: {exc}") from exc

        logger.info("Saved %d link(s) to %s", len(records), self.path)
