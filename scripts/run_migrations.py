#!/usr/bin/env python3
"""Apply the tag store schema, reporting failures to Logfire."""

import sys
import logfire
from alembic import command
from alembic.config import Config

from graffiti.config import Settings
from graffiti.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    """Upgrade the database to ``revision``."""
    settings = Settings()
    configure_logfire(settings)

    with logfire.span("migrations.upgrade", revision=revision):
        try:
            command.upgrade(Config("alembic.ini"), revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Fail the deploy rather than serve against a broken schema
            raise

    logfire.info("Database migrations completed", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
