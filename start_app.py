# start_app.py
"""Run database migrations and launch the API server."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys

import uvicorn
from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError

import config


def main(argv: list[str] | None = None) -> None:
    """Load settings, optionally apply migrations, then start the API."""

    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--skip-db-migrations",
        action="store_true",
        help="Start without running Alembic migrations",
    )
    args = parser.parse_args(argv)

    load_dotenv()  # load environment variables from a .env file

    env_flag = os.getenv("SKIP_DB_MIGRATIONS")
    skip = args.skip_db_migrations or (
        env_flag and env_flag.lower() not in {"0", "false"}
    )

    settings = config.get_settings()

    if not skip:
        from tiffin.app.db import run_migrations

        try:
            asyncio.run(run_migrations(settings.database_url))
        except (SQLAlchemyError, OSError) as exc:
            print(f"database migration failed: {exc}", file=sys.stderr)
            raise SystemExit(1)

    uvicorn.run(
        "tiffin.app.main:app",
        host="0.0.0.0",  # nosec B104: bind for local development
        port=int(os.getenv("PORT", "8000")),
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
