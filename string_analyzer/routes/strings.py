from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query, Response
from sqlalchemy.orm import Session

from string_analyzer.database import get_db
from string_analyzer.errors import StringAlreadyExistsError, StringNotFoundError
from string_analyzer.schemas import (
    InterpretedQuery,
    NaturalLanguageResponse,
    StringListResponse,
    StringResponse,
)
from string_analyzer.services import string_service
from string_analyzer.services.nlp import ParseFailure
from string_analyzer.validation import Invalid, validate_create_request, validate_filter_query

router = APIRouter(prefix="/strings", tags=["Strings"])


@router.post(
    "",
    response_model=StringResponse,
    status_code=201,
    summary="Analyze and store a string",
    responses={400: {"description": "Invalid body"}, 409: {"description": "String already exists"}},
)
def create_string_endpoint(
    payload: Any = Body(default=None, examples=[{"value": "racecar"}]),
    db: Session = Depends(get_db),
) -> StringResponse:
    result = validate_create_request(payload)
    if isinstance(result, Invalid):
        raise HTTPException(status_code=result.status_code, detail=result.message)
    try:
        record = string_service.create_string(db, result.value.value)
    except StringAlreadyExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return StringResponse.from_record(record)


@router.get(
    "",
    response_model=StringListResponse,
    summary="List strings",
    description=(
        "Returns stored strings, newest first, with optional filtering.\n\n"
        "Length bounds are inclusive; contains_character is case-insensitive."
    ),
)
def list_strings_endpoint(
    is_palindrome: Optional[str] = Query(default=None, description="true or false"),
    min_length: Optional[str] = Query(default=None, description="Minimum length (inclusive)"),
    max_length: Optional[str] = Query(default=None, description="Maximum length (inclusive)"),
    word_count: Optional[str] = Query(default=None, description="Exact word count"),
    contains_character: Optional[str] = Query(default=None, description="A single character"),
    db: Session = Depends(get_db),
) -> StringListResponse:
    result = validate_filter_query(
        {
            "is_palindrome": is_palindrome,
            "min_length": min_length,
            "max_length": max_length,
            "word_count": word_count,
            "contains_character": contains_character,
        }
    )
    if isinstance(result, Invalid):
        raise HTTPException(status_code=result.status_code, detail=result.message)

    records = string_service.list_strings(db, result.value)
    return StringListResponse(
        data=[StringResponse.from_record(r) for r in records],
        count=len(records),
        filters_applied=result.value.as_dict(),
    )


@router.get(
    "/filter-by-natural-language",
    response_model=NaturalLanguageResponse,
    summary="Filter strings with a natural language query",
    description='Example: "all single word palindromic strings".',
)
def filter_by_natural_language(
    query: Optional[str] = Query(default=None, description="Natural language query"),
    db: Session = Depends(get_db),
) -> NaturalLanguageResponse:
    parsed, records = string_service.filter_by_natural_language(db, query)
    if parsed.failure is ParseFailure.CONFLICTING:
        raise HTTPException(status_code=422, detail=parsed.errors[0])
    if parsed.failure is not None or parsed.filters is None:
        raise HTTPException(status_code=400, detail=parsed.errors[0])

    return NaturalLanguageResponse(
        data=[StringResponse.from_record(r) for r in records],
        count=len(records),
        interpreted_query=InterpretedQuery(
            original=parsed.original,
            parsed_filters=parsed.filters.as_dict(),
            notes=parsed.notes,
        ),
    )


@router.get(
    "/{string_value:path}",
    response_model=StringResponse,
    summary="Get a string by its exact value",
)
def get_string_endpoint(
    string_value: str = Path(..., description="Exact string value, URL-encoded"),
    db: Session = Depends(get_db),
) -> StringResponse:
    try:
        record = string_service.get_string(db, string_value)
    except StringNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return StringResponse.from_record(record)


@router.delete(
    "/{string_value:path}",
    status_code=204,
    response_class=Response,
    summary="Delete a string by its exact value",
)
def delete_string_endpoint(
    string_value: str = Path(..., description="Exact string value, URL-encoded"),
    db: Session = Depends(get_db),
) -> Response:
    try:
        string_service.delete_string(db, string_value)
    except StringNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
