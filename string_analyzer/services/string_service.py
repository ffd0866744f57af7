import logging
from typing import List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from string_analyzer import crud
from string_analyzer.errors import StringAlreadyExistsError, StringNotFoundError
from string_analyzer.models import StringRecord
from string_analyzer.services.analyzer import analyze
from string_analyzer.services.filters import FilterSpec
from string_analyzer.services.hashing import fingerprint
from string_analyzer.services.nlp import ParsedQuery, parse_natural_language

logger = logging.getLogger("string_analyzer.services")


def create_string(db: Session, value: str) -> StringRecord:
    """Analyze and persist ``value``; raises StringAlreadyExistsError on duplicates."""
    analysis = analyze(value)

    if crud.get_string(db, analysis.id) is not None:
        logger.info("Rejected duplicate string %s", analysis.id)
        raise StringAlreadyExistsError()

    try:
        record = crud.create_string(db, analysis)
    except IntegrityError:
        # Lost a race with a concurrent create of the same value
        logger.info("Concurrent insert of string %s rejected by the store", analysis.id)
        raise StringAlreadyExistsError() from None

    logger.info("Created string %s (length=%d)", record.id, record.length)
    return record


def get_string(db: Session, value: str) -> StringRecord:
    """Exact lookup by raw value, via its fingerprint."""
    record = crud.get_string(db, fingerprint(value))
    if record is None:
        raise StringNotFoundError()
    return record


def delete_string(db: Session, value: str) -> None:
    string_id = fingerprint(value)
    if not crud.delete_string(db, string_id):
        raise StringNotFoundError()
    logger.info("Deleted string %s", string_id)


def list_strings(db: Session, spec: FilterSpec) -> List[StringRecord]:
    records = crud.query_strings(db, spec)
    if spec.is_empty():
        logger.info("Listed all strings -> %d result(s)", len(records))
    else:
        logger.info("Filtered strings with %s -> %d result(s)", spec.as_dict(), len(records))
    return records


def filter_by_natural_language(db: Session, query: object) -> Tuple[ParsedQuery, List[StringRecord]]:
    """Interpret ``query`` and run the resulting filters.

    A failed parse is returned as-is with no records; the store is not queried.
    """
    parsed = parse_natural_language(query)
    if not parsed.ok or parsed.filters is None:
        logger.info("Natural language query %r not usable: %s", query, parsed.errors)
        return parsed, []
    return parsed, list_strings(db, parsed.filters)
