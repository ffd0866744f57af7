from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional

from string_analyzer.services.hashing import fingerprint


@dataclass(frozen=True)
class AnalyzedString:
    """Derived properties of a submitted string."""

    id: str
    value: str
    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    character_frequency_map: Dict[str, int]
    created_at: datetime


def is_palindrome(value: str) -> bool:
    # Whitespace is compared like any other character: "race car" is not a palindrome
    normalized = value.lower()
    return normalized == normalized[::-1]


def unique_character_count(value: str) -> int:
    return len(set(value.lower()))


def word_count(value: str) -> int:
    return len(value.split())


def character_frequency_map(value: str) -> Dict[str, int]:
    freq: Dict[str, int] = {}
    for c in value.lower():
        if c.isspace():
            continue
        freq[c] = freq.get(c, 0) + 1
    return freq


def analyze(value: str, now: Optional[datetime] = None) -> AnalyzedString:
    """Compute every stored property of ``value``.

    ``length`` and ``word_count`` look at the string as submitted; the palindrome
    check, unique character count and frequency map work on its lowercased copy.
    Python strings iterate by code point, so characters outside the BMP count once.
    """
    return AnalyzedString(
        id=fingerprint(value),
        value=value,
        length=len(value),
        is_palindrome=is_palindrome(value),
        unique_characters=unique_character_count(value),
        word_count=word_count(value),
        character_frequency_map=character_frequency_map(value),
        created_at=now or datetime.now(timezone.utc),
    )
