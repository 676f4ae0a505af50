from __future__ import annotations

import logging
import sys

ROOT_LOGGER = "ghe"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(debug_enabled: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the ``ghe`` logger tree.

    stdout stays untouched because the stdio transport owns it.
    """

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_ghe_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._ghe_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug_enabled else logging.INFO)
    logger.propagate = False
    return logger
