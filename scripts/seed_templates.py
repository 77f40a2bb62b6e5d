"""Seed the built-in SOP templates into Postgres.

Usage:
    python -m scripts.seed_templates
Requires: DATABASE_BACKEND=postgres, DATABASE_URL and a migrated schema
(alembic upgrade head). Templates that already exist are left untouched.
"""

import asyncio
import sys

from sopflow.core.config import get_settings
from sopflow.infrastructure.catalog import seed_builtin_templates
from sopflow.infrastructure.persistence import database
from sopflow.infrastructure.persistence.repositories import SqlTemplateRepository
from sopflow.shared.telemetry.logging import setup_logging


async def main() -> None:
    setup_logging()
    get_settings()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print(
            "Postgres not configured: set DATABASE_BACKEND=postgres and DATABASE_URL",
            file=sys.stderr,
        )
        sys.exit(1)

    try:
        async with database.AsyncSessionLocal() as session:
            async with session.begin():
                added = await seed_builtin_templates(SqlTemplateRepository(session))
        print(f"Seeded {added} template(s).")
    finally:
        await database.dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
