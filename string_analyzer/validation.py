"""Explicit request validation.

Each validator returns either ``Valid`` wrapping the typed request object or
``Invalid`` carrying the HTTP status and a message; nothing is raised.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar, Union

from pydantic import ValidationError

from string_analyzer.schemas import StringFilterQuery, StringRequest
from string_analyzer.services.filters import FilterSpec

T = TypeVar("T")

INVALID_BODY = 'Invalid request body or missing "value" field'
INVALID_QUERY = "Invalid query parameter values or types"
CONFLICTING_QUERY = "Query parsed but resulted in conflicting filters"


@dataclass(frozen=True)
class Valid(Generic[T]):
    value: T


@dataclass(frozen=True)
class Invalid:
    message: str
    status_code: int = 400
    details: List[Dict[str, Any]] = field(default_factory=list)


ValidationResult = Union[Valid[T], Invalid]


def _error_details(exc: ValidationError) -> List[Dict[str, Any]]:
    return [
        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]


def validate_create_request(payload: Any) -> "ValidationResult[StringRequest]":
    if not isinstance(payload, dict):
        return Invalid(INVALID_BODY)
    try:
        return Valid(StringRequest.model_validate(payload))
    except ValidationError as e:
        return Invalid(INVALID_BODY, details=_error_details(e))


def validate_filter_query(params: Mapping[str, Optional[str]]) -> "ValidationResult[FilterSpec]":
    """Validate raw GET /strings query parameters into a FilterSpec.

    Type errors, negative numbers and multi-character ``contains_character`` give 400;
    ``min_length > max_length`` gives 422.
    """
    supplied = {k: v for k, v in params.items() if v is not None}
    try:
        query = StringFilterQuery.model_validate(supplied)
    except ValidationError as e:
        return Invalid(INVALID_QUERY, details=_error_details(e))

    spec = FilterSpec(**query.model_dump(exclude_none=True))
    if spec.has_length_conflict:
        return Invalid(CONFLICTING_QUERY, status_code=422)
    return Valid(spec)
