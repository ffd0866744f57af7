import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from string_analyzer.services.filters import FilterSpec

_NUM_WORDS = {
    'zero': 0,
    'one': 1,
    'two': 2,
    'three': 3,
    'four': 4,
    'five': 5,
    'six': 6,
    'seven': 7,
    'eight': 8,
    'nine': 9,
    'ten': 10,
    'eleven': 11,
    'twelve': 12,
    'thirteen': 13,
    'fourteen': 14,
    'fifteen': 15,
    'sixteen': 16,
    'seventeen': 17,
    'eighteen': 18,
    'nineteen': 19,
    'twenty': 20,
}

# Patterns are applied in this order; later rules may override earlier ones.
_PALINDROME = re.compile(r'palindrom')
_SINGLE_WORD = re.compile(r'single\s+word')
# digits or a spelled-out number; any other word after "longer" is not a bound
_NUMBER = r'(\d+|' + '|'.join(_NUM_WORDS) + r')\b'
_LONGER_THAN = re.compile(r'(?:longer(?:\s+than)?|more\s+than)\s+' + _NUMBER)
_SHORTER_THAN = re.compile(r'(?:shorter(?:\s+than)?|less\s+than)\s+' + _NUMBER)
_CONTAINS_LETTER = re.compile(
    r"contain(?:s|ing)?\s+(?:the\s+)?(?:(?:letter|character)\s+)?['\"]?([a-z])\b"
)
_FIRST_VOWEL = re.compile(r'first\s+vowel')

EMPTY_QUERY_ERROR = "Query must be a non-empty string"
UNPARSEABLE_ERROR = "Unable to parse natural language query"
CONFLICT_ERROR = "Conflicting filters: min_length > max_length"
FIRST_VOWEL_NOTE = "first vowel -> heuristic: a"


class ParseFailure(str, Enum):
    UNPARSEABLE = "unparseable"
    CONFLICTING = "conflicting_filters"


@dataclass(frozen=True)
class ParsedQuery:
    """Outcome of interpreting a natural language query.

    ``failure`` is None on success. On a conflict the offending filters are kept in
    ``filters`` so callers can report them; on any other failure ``filters`` is None.
    """

    original: str
    filters: Optional[FilterSpec]
    errors: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    failure: Optional[ParseFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def _to_int(s: str) -> int:
    """Convert numeric words or digit strings to integers."""
    s = s.strip()
    if s.isdigit():
        return int(s)
    return _NUM_WORDS[s]


def parse_natural_language(query: Any) -> ParsedQuery:
    """Interpret a natural language filter query into a FilterSpec.

    Every rule that matches contributes to the same conjunctive filter:

    - "palindrome"/"palindromic" -> is_palindrome=True
    - "single word" -> word_count=1
    - "longer than N" / "more than N" -> min_length=N+1
    - "shorter than N" / "less than N" -> max_length=N-1
    - "contains the letter x" -> contains_character='x'
    - "first vowel" -> contains_character='a' (fixed heuristic, noted in ``notes``)
    """
    if not isinstance(query, str) or not query:
        return ParsedQuery(
            original=query if isinstance(query, str) else "",
            filters=None,
            errors=[EMPTY_QUERY_ERROR],
            failure=ParseFailure.UNPARSEABLE,
        )

    q = query.lower().strip()
    parsed: Dict[str, Any] = {}
    notes: List[str] = []

    if _PALINDROME.search(q):
        parsed['is_palindrome'] = True

    if _SINGLE_WORD.search(q):
        parsed['word_count'] = 1

    m = _LONGER_THAN.search(q)
    if m:
        # exclusive lower bound expressed as an inclusive one
        parsed['min_length'] = _to_int(m.group(1)) + 1

    m = _SHORTER_THAN.search(q)
    if m:
        parsed['max_length'] = _to_int(m.group(1)) - 1

    m = _CONTAINS_LETTER.search(q)
    if m:
        parsed['contains_character'] = m.group(1)

    if _FIRST_VOWEL.search(q):
        parsed['contains_character'] = 'a'
        notes.append(FIRST_VOWEL_NOTE)

    if not parsed:
        return ParsedQuery(
            original=query,
            filters=None,
            errors=[UNPARSEABLE_ERROR],
            failure=ParseFailure.UNPARSEABLE,
        )

    spec = FilterSpec(**parsed)
    if spec.has_length_conflict:
        return ParsedQuery(
            original=query,
            filters=spec,
            errors=[CONFLICT_ERROR],
            notes=notes,
            failure=ParseFailure.CONFLICTING,
        )

    return ParsedQuery(original=query, filters=spec, notes=notes)
