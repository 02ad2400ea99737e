"""Logging configuration.

Modules log through the standard library:

    import logging
    logger = logging.getLogger(__name__)

and ``configure_logging`` is called once when the application starts.
"""

import logging
import sys
from typing import Optional

from tidyhome.config import settings

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Attach a stderr handler to the ``tidyhome`` logger.

    Args:
        level: Log level name; defaults to ``settings.LOG_LEVEL``

    Calling this more than once replaces the handler instead of stacking them.
    """
    logger = logging.getLogger("tidyhome")
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
