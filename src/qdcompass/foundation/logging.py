"""
Opt-in console logging for qdcompass.

Library modules only create loggers; handlers are attached here, on request.
Selection records are written under ``qdcompass.adaptation.compass``: each
choice and each attributed reward is a DEBUG record, and a roulette fallback
is a WARNING.
"""

from __future__ import annotations

import logging
from typing import IO

PACKAGE_LOGGER = "qdcompass"
COMPASS_LOGGER = "qdcompass.adaptation.compass"


def configure_qdcompass_logging(
    *,
    level: int = logging.INFO,
    trace_selections: bool = False,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """
    Attach a console handler to the qdcompass logger.

    trace_selections lowers the compass loggers to DEBUG so every choice and
    reward attribution is emitted, independently of level. The handler is
    only attached if neither the root logger nor the qdcompass logger already
    has handlers; the compass level is applied either way.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    compass_logger = logging.getLogger(COMPASS_LOGGER)
    compass_logger.setLevel(logging.DEBUG if trace_selections else logging.NOTSET)

    if logging.getLogger().handlers or package_logger.handlers:
        return package_logger

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False
    return package_logger


__all__ = ["COMPASS_LOGGER", "PACKAGE_LOGGER", "configure_qdcompass_logging"]
