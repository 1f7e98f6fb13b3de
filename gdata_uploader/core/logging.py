"""Logging configuration for the client"""
import logging

from gdata_uploader.core.config import settings


def setup_logging():
    """Configure logging for scripts that use the client"""
    LOG_LEVEL = settings.LOG_LEVEL.upper()
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        force=True
    )

    # Silence noisy third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str = __name__):
    """Get a logger by name"""
    return logging.getLogger(name)


# Export commonly used loggers
upload_logger = logging.getLogger("upload")
auth_logger = logging.getLogger("auth")
http_logger = logging.getLogger("http")
