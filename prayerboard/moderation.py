"""
Static denylist content moderation.

Every free-text field goes through `moderate_content` before it is written.
Matching is whole-word and case-insensitive; there is no fuzzy matching.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

INAPPROPRIATE_WORDS = (
    "hate",
    "kill",
    "murder",
    "die",
    "death",
    "violence",
    "attack",
    "racist",
    "sexist",
    "discrimination",
    "harassment",
    "abuse",
    "curse",
    "damn",
    "hell",
    "bastard",
    "bitch",
    "ass",
    "shit",
    "fuck",
    "crap",
    "piss",
    "asshole",
    "dick",
    "cock",
    "pussy",
    "whore",
    "slut",
)

MODERATION_MESSAGE = (
    "Content moderation failed. "
    "Please ensure your message is respectful and appropriate."
)
NAME_MODERATION_MESSAGE = "Please use an appropriate name."

_PATTERNS = tuple(
    re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE)
    for word in INAPPROPRIATE_WORDS
)


@dataclass(frozen=True)
class ModerationResult:
    is_profane: bool
    message: Optional[str] = None


def is_profane(text: Optional[str]) -> bool:
    if not text:
        return False
    lowered = text.lower()
    return any(pattern.search(lowered) for pattern in _PATTERNS)


def moderate_content(text: Optional[str]) -> ModerationResult:
    """Return a rejection result carrying the user-facing message, or a pass."""
    if is_profane(text):
        return ModerationResult(is_profane=True, message=MODERATION_MESSAGE)
    return ModerationResult(is_profane=False)
