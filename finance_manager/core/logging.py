import logging
from typing import Optional

from finance_manager.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def configure_logging(level: Optional[str] = None) -> None:
    """Install a single stream handler on the package logger"""
    logger = logging.getLogger("finance_manager")
    logger.setLevel((level or settings.LOG_LEVEL).upper())
    
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
