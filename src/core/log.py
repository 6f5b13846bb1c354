import logging
import os
import sys
from typing import Optional, Union


def setup_logging(
    level: Union[int, str] = logging.INFO,
    stream=sys.stderr,
    fmt: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Sets up a logger (root by default) with a stream handler and basic formatting.
    Does nothing if handlers are already configured, except for the
    LOG_LEVEL environment override which always applies.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    target = logger or logging.getLogger()
    if not target.hasHandlers():
        if fmt is None:
            if level == logging.DEBUG:
                fmt = "%(asctime)s | %(levelname)-5s | %(name)s | %(filename)s:%(lineno)d | %(message)s"
            else:
                fmt = "%(asctime)s | %(levelname)-5s | %(message)s"

        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(fmt))

        target.setLevel(level)
        target.addHandler(handler)

    env_level = os.environ.get("LOG_LEVEL")
    if env_level:
        target.setLevel(env_level.strip().upper())
