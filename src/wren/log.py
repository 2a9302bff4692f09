"""Logging setup for the ``wren`` logger tree.

Library modules only call ``logging.getLogger("wren.<area>")``. Handlers
are attached here, by the CLI or by applications that want wren's output
on stderr.
"""

import logging
import sys

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s  %(message)s"


def configure_logging(level: str | int = "info") -> logging.Logger:
    """Attach a stderr handler to the ``wren`` logger and set its level.

    Safe to call more than once; an existing wren handler is reused.
    """
    logger = logging.getLogger("wren")
    if isinstance(level, str):
        level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
    logger.setLevel(level)

    for handler in logger.handlers:
        if getattr(handler, "_wren_handler", False):
            break
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._wren_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
