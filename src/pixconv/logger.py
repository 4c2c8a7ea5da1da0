import logging
import os
import sys

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def setup_logger(level: int = logging.WARNING, name: str = "pixconv") -> logging.Logger:
    """Create or update the project logger.

    - PIXCONV_LOG_LEVEL overrides ``level`` on every call, so a late call from
      the CLI still picks it up.
    - Keeps exactly one stderr StreamHandler on the base logger. Nothing is ever
      logged to stdout because converted image bytes may be written there.
    """
    logger = logging.getLogger(name)

    env_level = (os.getenv("PIXCONV_LOG_LEVEL") or "").strip().lower()
    if env_level:
        level = _LEVELS.get(env_level, level)
    logger.setLevel(level)

    stream_handler: logging.StreamHandler | None = None
    for h in list(logger.handlers):
        if not isinstance(h, logging.StreamHandler):
            continue
        if getattr(h, "stream", None) is sys.stderr:
            stream_handler = h
        else:
            # stderr was replaced since the handler was created
            logger.removeHandler(h)

    if stream_handler is None:
        stream_handler = logging.StreamHandler(stream=sys.stderr)
        logger.addHandler(stream_handler)

    fmt = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    stream_handler.setFormatter(fmt)

    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    base = logging.getLogger("pixconv")
    return base if not name else base.getChild(name)
