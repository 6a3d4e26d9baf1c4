"""Kebun core — status merge, dashboard counts, services and storage adapters."""

import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Configure stdout logging for the API process.

    Module loggers are named ``kebun.<module>``; driver and HTTP client chatter
    is kept at WARNING so request logs stay readable.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    # Silence noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


logger = logging.getLogger("kebun")
