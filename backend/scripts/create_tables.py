"""Create the notifications table from the SQLAlchemy models.

Usage:
    cd backend
    python scripts/create_tables.py

Only needed where DB_SYNCHRONIZE=false; otherwise the API creates missing
tables itself at startup.
"""
import asyncio
import logging

from app.core.config import settings
from app.core.logging import configure_logging
from app.db.session import get_engine, init_db

logger = logging.getLogger("create_tables")


async def _create(engine) -> None:
    try:
        await init_db(engine, create_tables=True)
    finally:
        await engine.dispose()


def main() -> int:
    configure_logging(settings.log_level, db_echo=settings.db_echo)
    engine = get_engine(settings)
    logger.info("Creating tables on %s ...", engine.url.render_as_string(hide_password=True))
    try:
        asyncio.run(_create(engine))
    except Exception:
        logger.exception("Could not create tables")
        return 1
    logger.info("Done.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
