"""Root logger setup for the review bot.

Every module logs under ``prreview.<module>``. Ignored events and per-file
progress go to DEBUG/INFO; failed GitHub, raw fetch and model calls go to
ERROR, so a run at ERROR shows only what went wrong with a review.

Configure via config.yaml (logging.level, logging.format) or env
(LOGGING_LEVEL, LOGGING_FORMAT).
"""

import logging

from prreview.config import LoggingConfig

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# requests' connection pool logs one line per GitHub call and fetched file
QUIET_LOGGERS = ("urllib3",)


def resolve_level(name: str) -> int:
    """Level constant for a name like "debug" or "WARNING"; unknown names give INFO."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(config: LoggingConfig) -> None:
    """Apply level and format to the root logger.

    HTTP client loggers follow the root level only at DEBUG and stay at
    WARNING otherwise.
    """
    level = resolve_level(config.level)
    logging.basicConfig(level=level, format=config.format or DEFAULT_FORMAT, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)
