"""Run the Device Hub server with uvicorn."""

from __future__ import annotations

import logging
import sys

import uvicorn
from pydantic import ValidationError

from devicehub.models import Config

logger = logging.getLogger(__name__)


def main() -> int:
    """Validate configuration and serve the API.

    Returns:
        Process exit code
    """
    try:
        config = Config()
    except ValidationError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(f"Configuration validation failed, please check .env: {e}")
        return 1

    uvicorn.run("devicehub.main:app", host=config.host, port=config.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
