#!/usr/bin/env python3
"""Apply or roll back database migrations with Logfire error tracking.

Usage:
    python scripts/run_migrations.py              # upgrade to head
    python scripts/run_migrations.py --downgrade base
"""

import argparse
import sys

import logfire
from alembic import command
from alembic.config import Config

from wishyork.config import Settings
from wishyork.util.observability import configure_logfire


def main() -> int:
    parser = argparse.ArgumentParser(description="Run WishYork migrations")
    parser.add_argument("revision", nargs="?", default="head")
    parser.add_argument("--downgrade", action="store_true")
    parser.add_argument("--config", default="alembic.ini")
    args = parser.parse_args()

    settings = Settings()
    configure_logfire(settings)

    direction = "downgrade" if args.downgrade else "upgrade"
    try:
        logfire.info(
            "Starting database migrations",
            direction=direction,
            revision=args.revision,
        )

        alembic_cfg = Config(args.config)
        if args.downgrade:
            command.downgrade(alembic_cfg, args.revision)
        else:
            command.upgrade(alembic_cfg, args.revision)

        logfire.info("Database migrations completed", direction=direction)
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails and doesn't start with broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())
