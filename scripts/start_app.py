#!/usr/bin/env python3
"""Start the API server with Logfire tracking for startup errors."""

import sys
import logfire
import uvicorn

from graffiti.config import Settings
from graffiti.util.logging import setup_logging
from graffiti.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting graffiti core",
            host=settings.host,
            port=settings.port,
            environment=settings.environment,
        )

        # Single worker: live subscriptions and per-tag locks are in-process
        uvicorn.run(
            "graffiti.interface.api.app:app",
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
