import sys
from typing import Optional

from loguru import logger

from storefront_qa.app.core.config import get_settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"


def configure_logging(level: Optional[str] = None) -> None:
    log_level = (level or get_settings().logging.level).upper()
    logger.remove()
    logger.add(
        sink=lambda msg: print(msg, end="", file=sys.stderr),
        level=log_level,
        format=LOG_FORMAT,
    )
