"""
Seed the daily inspiration table.

Loads inspirations from a JSON file (a list of {content, attribution, type})
or falls back to the built-in defaults. Existing rows are left alone unless
--force is given.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from prayerboard.config import get_settings
from prayerboard.dependencies import build_db_client
from prayerboard.inspirations import load_inspirations, seed_inspirations

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed daily inspirations")
    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        default=None,
        help="JSON file with inspirations (defaults to the built-in set)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Insert even if inspirations already exist",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
    )

    settings = get_settings()
    if not settings.database_url:
        logger.warning(
            "No DATABASE_URL set; seeding in-memory storage has no lasting effect"
        )
    db = build_db_client(settings)
    items = load_inspirations(args.file) if args.file else None
    inserted = seed_inspirations(db, items, force=args.force)
    print(f"Inserted {inserted} inspirations")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
