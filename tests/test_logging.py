import logging

from finance_manager.config import settings
from finance_manager.core.logging import configure_logging

def test_configure_logging_defaults_to_settings_level():
    configure_logging()
    logger = logging.getLogger("finance_manager")
    
    assert logger.level == logging.getLevelName(settings.LOG_LEVEL.upper())
    assert len(logger.handlers) == 1

def test_configure_logging_level_override():
    configure_logging("debug")
    configure_logging("warning")
    logger = logging.getLogger("finance_manager")
    
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
