#!/usr/bin/env python3
"""Apply database migrations with Logfire error tracking.

Schema changes only happen here, never while serving requests.
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from forum.config import Settings
from forum.util.logging import setup_logging
from forum.util.observability import configure_logfire


def main() -> int:
    """Upgrade the database to the latest revision."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        with logfire.span("migrations.upgrade", environment=settings.environment):
            command.upgrade(Config("alembic.ini"), "head")
        logfire.info("Database migrations completed successfully")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Fail the deploy rather than serve on a broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())
