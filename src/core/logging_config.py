import logging
import sys
import os
from typing import TextIO

NAMESPACE = "applife"

_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
_HANDLER_NAME = "applife-console"


def resolve_level(level: str | int | None) -> int:
    """Map a level name (or number) to a logging level, INFO if unknown."""
    if isinstance(level, int):
        return level
    name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str | int | None = None,
                  stream: TextIO | None = None) -> logging.Logger:
    """Configure the applife namespace logger.

    Safe to call again (e.g. once config is loaded): the console handler
    is replaced, not duplicated.
    """
    formatter = logging.Formatter(fmt=_FORMAT, datefmt="%H:%M:%S")

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    root = logging.getLogger(NAMESPACE)
    for old in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(old)
    root.addHandler(handler)
    root.setLevel(resolve_level(level))
    root.propagate = False  # prevent duplicate output via root logger

    logging.basicConfig(level=logging.WARNING)

    # Quiet noisy libraries
    for name in ("asyncio", "dotenv"):
        logging.getLogger(name).setLevel(logging.WARNING)

    return root
