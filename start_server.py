#!/usr/bin/env python3
"""Run the API under uvicorn, configured from the environment"""

import logging
import os

import uvicorn

from app.config.settings import load_settings
from main import configure_logging

logger = logging.getLogger(__name__)


def server_options() -> dict:
    port = os.getenv("PORT", "8000")
    try:
        port = int(port)
    except ValueError as exc:
        raise ValueError(f"PORT must be an integer, got {port!r}") from exc
    return {
        "host": os.getenv("HOST", "0.0.0.0"),
        "port": port,
        "reload": os.getenv("RELOAD", "false").lower() == "true",
    }


def main():
    settings = load_settings()
    configure_logging(settings.log_level)
    options = server_options()

    logger.info(
        "Starting server host=%s port=%s storage=%s reload=%s",
        options["host"], options["port"], settings.storage_backend, options["reload"],
    )
    # The app factory builds the store, so a bad database config stops startup here
    uvicorn.run(
        "main:create_app",
        factory=True,
        log_level=settings.log_level.lower(),
        **options,
    )


if __name__ == "__main__":
    main()
