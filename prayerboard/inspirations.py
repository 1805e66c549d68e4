"""
Default daily inspirations and seeding helpers.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Optional

from prayerboard.db import DbClient
from prayerboard.schemas import InspirationCreate

logger = logging.getLogger(__name__)

DEFAULT_INSPIRATIONS: tuple[dict, ...] = (
    {
        "content": "The Lord is my shepherd; I shall not want.",
        "attribution": "Psalm 23:1",
        "type": "verse",
    },
    {
        "content": (
            "For I know the plans I have for you, declares the Lord, plans for "
            "welfare and not for evil, to give you a future and a hope."
        ),
        "attribution": "Jeremiah 29:11",
        "type": "verse",
    },
    {
        "content": "Peace begins with a smile.",
        "attribution": "Mother Teresa",
        "type": "quote",
    },
    {
        "content": (
            "Prayer is not asking. Prayer is putting oneself in the hands of God."
        ),
        "attribution": "Mother Teresa",
        "type": "quote",
    },
    {
        "content": "Be still, and know that I am God.",
        "attribution": "Psalm 46:10",
        "type": "verse",
    },
    {
        "content": (
            "In moments of stillness, we find God's voice speaking to our hearts."
        ),
        "attribution": "Anonymous",
        "type": "thought",
    },
    {
        "content": "Cast all your anxiety on him because he cares for you.",
        "attribution": "1 Peter 5:7",
        "type": "verse",
    },
)


def load_inspirations(path: Path) -> list[InspirationCreate]:
    """Read a JSON list of {content, attribution, type} objects."""
    with open(path, "r", encoding="utf-8") as f:
        items = json.load(f)
    if not isinstance(items, list):
        raise ValueError(f"{path} must contain a JSON list")
    return [InspirationCreate.model_validate(item) for item in items]


def seed_inspirations(
    db: DbClient,
    items: Optional[Iterable[InspirationCreate]] = None,
    *,
    force: bool = False,
) -> int:
    """Insert inspirations when none exist yet (or always, with `force`).

    Returns the number inserted.
    """
    existing = len(db.list_inspirations())
    if existing and not force:
        logger.info(
            "Inspiration table already has %d entries, skipping seed", existing
        )
        return 0

    if items is None:
        items = [InspirationCreate.model_validate(item) for item in DEFAULT_INSPIRATIONS]

    total = 0
    for item in items:
        db.create_inspiration(item.content, item.attribution, item.type)
        total += 1
    logger.info("Seeded %d daily inspirations", total)
    return total
