"""
Byte Portal Runner

`python -m portal.run`
"""
import logging

import uvicorn

from .app import configure_logging
from .config import Config

logger = logging.getLogger("byte")


def run():
    configure_logging()
    logger.info(f"Serving Byte Portal on {Config.API_HOST}:{Config.API_PORT}")
    uvicorn.run(
        "portal.app:app",
        host=Config.API_HOST,
        port=Config.API_PORT,
        reload=Config.DEBUG,
        log_level=Config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
