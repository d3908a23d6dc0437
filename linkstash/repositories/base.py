"""Abstract base class for all file-backed repositories.

Every repository in this project must extend ``BaseFileRepository``.

Extending for a new file:
    1. Add the path to ``Settings``.
    2. Subclass ``BaseFileRepository`` and set ``SETTINGS_FIELD`` to the
       name of that setting.
    3. Build it with ``from_settings()`` wherever it is needed.

Example::

    class ArchiveRepository(BaseFileRepository):
        SETTINGS_FIELD = "archive_path"
"""

from __future__ import annotations

import logging
from abc import ABC
from pathlib import Path
from typing import ClassVar, TypeVar

from linkstash.core.config import Settings, settings

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="BaseFileRepository")


class BaseFileRepository(ABC):
    """Base class that wires a repository to the file it owns.

    Subclasses declare:
    - ``SETTINGS_FIELD`` - the ``Settings`` attribute holding the path.

    The ``from_settings`` classmethod is the standard factory used by the
    API dependencies and the CLI.
    """

    SETTINGS_FIELD: ClassVar[str]

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def from_settings(cls: type[T], config: Settings | None = None) -> T:
        """Instantiate the repository from the configured path.

        Usage::

            repo = LinkRepository.from_settings()
        """
        return cls(getattr(config or settings, cls.SETTINGS_FIELD))

    # ------------------------------------------------------------------
    # Storage helpers
    # ------------------------------------------------------------------

    def ensure_storage(self) -> None:
        """Create the parent directory of the backing file.  Idempotent."""
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def _read_text(self) -> str | None:
        """Return the file content, or ``None`` when the file does not exist.

        Other ``OSError``s propagate; subclasses map them to their own error.
        """
        if not self._path.exists():
            return None
        return self._path.read_text(encoding="utf-8")
