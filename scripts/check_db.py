"""
Check that the configured database is reachable.

Exits 0 when no DATABASE_URL is configured (the service then runs in-memory),
0 when `SELECT 1` succeeds and 1 otherwise.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError

from prayerboard.config import get_settings

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Database connectivity check")
    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="Override DATABASE_URL",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
    )

    database_url = args.database_url or get_settings().database_url
    logger.info("Using DATABASE_URL: %s", bool(database_url))
    if not database_url:
        logger.info("No DATABASE_URL set, aborting.")
        return 0

    engine = create_engine(database_url)
    try:
        with engine.connect() as conn:
            now = conn.execute(text("SELECT CURRENT_TIMESTAMP")).scalar()
        logger.info("Connected OK: %s", now)
        return 0
    except SQLAlchemyError as exc:
        logger.error("DB connect error: %s", exc)
        return 1
    finally:
        engine.dispose()


if __name__ == "__main__":
    raise SystemExit(main())
