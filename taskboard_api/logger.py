import logging
import sys
from taskboard_api.config import get_settings

settings = get_settings()

LOG_FORMATS = {
    "text": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "detailed": "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s",
}


def get_log_format(log_format: str) -> str:
    """Resolve the LOG_FORMAT setting to a logging format string"""
    try:
        return LOG_FORMATS[log_format.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown LOG_FORMAT '{log_format}', expected one of: {', '.join(LOG_FORMATS)}"
        )


def setup_logging():
    """Configure service logging"""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=get_log_format(settings.log_format),
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for a service module, e.g. get_logger(__name__)"""
    return logging.getLogger(name)


setup_logging()
