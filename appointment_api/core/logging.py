import logging

from .config import Settings

LOGGER_NAME = "appointment_api"

def configure_logging(settings: Settings) -> logging.Logger:
    """Configure root logging from settings and return the application logger."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.LOG_LEVEL.upper())
    return logger
