"""API entry point for running as a module: python -m api."""

from __future__ import annotations

import logging
import sys

import uvicorn
from attention_index.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    stream=sys.stdout,
)

logger = logging.getLogger("api")


def main() -> None:
    logger.info("Starting Attention Index API on %s:%d", settings.api_host, settings.api_port)
    uvicorn.run(
        "api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
