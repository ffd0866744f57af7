from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, StrictStr, field_serializer

from string_analyzer.models import StringRecord


def _iso_utc(dt: datetime) -> str:
    # SQLite hands back naive datetimes; every stored timestamp is UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class StringRequest(BaseModel):
    """Request schema for creating/analyzing a string."""
    value: StrictStr


class StringFilterQuery(BaseModel):
    """Query parameters accepted by GET /strings, before the range check."""
    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = Field(default=None, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)
    word_count: Optional[int] = Field(default=None, ge=0)
    contains_character: Optional[str] = Field(default=None, min_length=1, max_length=1)


class StringProperties(BaseModel):
    """Computed properties of an analyzed string."""
    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class StringResponse(BaseModel):
    """Response schema for string records."""
    id: str
    value: str
    properties: StringProperties
    created_at: datetime

    @field_serializer("created_at")
    def _serialize_created_at(self, dt: datetime) -> str:
        return _iso_utc(dt)

    @classmethod
    def from_record(cls, record: StringRecord) -> "StringResponse":
        return cls(
            id=record.id,
            value=record.value,
            properties=StringProperties(
                length=record.length,
                is_palindrome=record.is_palindrome,
                unique_characters=record.unique_characters,
                word_count=record.word_count,
                sha256_hash=record.id,
                character_frequency_map=record.character_frequency_map,
            ),
            created_at=record.created_at,
        )


class StringListResponse(BaseModel):
    """Response schema for GET /strings."""
    data: List[StringResponse]
    count: int
    filters_applied: Dict[str, Any] = Field(default_factory=dict)


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]
    notes: List[str] = Field(default_factory=list)


class NaturalLanguageResponse(BaseModel):
    """Response schema for GET /strings/filter-by-natural-language."""
    data: List[StringResponse]
    count: int
    interpreted_query: InterpretedQuery


class HealthResponse(BaseModel):
    status: str = "ok"
