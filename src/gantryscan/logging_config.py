"""
Logging Configuration
Attaches console (and optionally file) handlers to the application's logger
namespace. Modules log through `logging.getLogger(__name__)` and inherit them.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    namespace: str = "gantryscan"
) -> logging.Logger:
    """
    Configures the logger for `namespace` and returns it.

    Calling it again replaces the previous handlers, so a second call (tests,
    re-launch from an interpreter) does not duplicate every line.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path; the file is truncated on start.
        namespace: Logger name whose subtree gets the handlers.
    """
    logger = logging.getLogger(namespace)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info("Logging initialized (level %s).", logging.getLevelName(level))
    return logger
