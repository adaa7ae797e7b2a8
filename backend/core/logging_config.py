import logging

from backend.core import config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once for the whole process."""
    global _configured

    if _configured:
        return

    logging.basicConfig(level=level or config.LOG_LEVEL, format=LOG_FORMAT)
    _configured = True
