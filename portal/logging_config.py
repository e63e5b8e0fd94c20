from __future__ import annotations

import logging

GUARD_LOGGER = "portal.security"


def configure_app_logging(level: str = "INFO", guard_level: str | None = None) -> None:
    """
    Minimal logging configuration for the portal.

    Notes:
    - stdlib logging only; uvicorn (or the embedding client) owns the handlers.
    - `level` applies to the `portal` package; child loggers inherit it.
    - `guard_level` overrides the `portal.security` subtree, where the route
      guard and the identity resolver log. Unset, it inherits `level`.
    """

    portal_logger = logging.getLogger("portal")
    portal_logger.setLevel(level.upper())
    portal_logger.propagate = True

    guard_logger = logging.getLogger(GUARD_LOGGER)
    guard_logger.setLevel(guard_level.upper() if guard_level else logging.NOTSET)
