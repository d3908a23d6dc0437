from __future__ import annotations

import logging

from linkstash.core.config import settings


def configure_logging(level: str | None = None) -> None:
    """Configure the ``linkstash`` logger namespace.

    ``logging.basicConfig`` is a no-op when the root logger already has
    handlers (uvicorn and pytest both install their own).  Configuring the
    ``linkstash`` namespace directly, with ``propagate = False``, keeps
    application logs on stderr whichever entry point is running.
    """
    name = (level or settings.log_level).upper()
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
    )
    app_log = logging.getLogger("linkstash")
    app_log.setLevel(getattr(logging, name, logging.INFO))
    if not app_log.handlers:
        app_log.addHandler(handler)
    app_log.propagate = False
