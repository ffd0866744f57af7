from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class FilterSpec(BaseModel):
    """Predicates over stored strings, built from query parameters or a parsed NL query.

    Bounds are inclusive. No range checks happen here: the NL parser may legitimately
    produce ``max_length=-1`` for "shorter than 0", which simply matches nothing.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    word_count: Optional[int] = None
    contains_character: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.as_dict()

    @property
    def has_length_conflict(self) -> bool:
        return (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        )
