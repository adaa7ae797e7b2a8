"""Run the API with uvicorn.

Usage:
    python -m backend.serve
"""
import logging

import uvicorn

from backend.core import config
from backend.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    setup_logging()
    config.validate_runtime_config()
    logger.info("Server running on port %s", config.PORT)
    uvicorn.run("backend.main:app", host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
