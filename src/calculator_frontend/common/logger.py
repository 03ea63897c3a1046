"""Project-wide logger."""
import logging
import sys
from typing import Union

LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger: logging.Logger = logging.getLogger("calculator_frontend")


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Attach a stderr handler to the project logger.

    Called once by the command-line entry point. Library code only emits records.

    :param level: Logging level name or number
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
