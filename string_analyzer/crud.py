import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from string_analyzer import models
from string_analyzer.services.analyzer import AnalyzedString
from string_analyzer.services.filters import FilterSpec

logger = logging.getLogger("string_analyzer.crud")


def get_string(db: Session, string_id: str) -> Optional[models.StringRecord]:
    return db.get(models.StringRecord, string_id)


def create_string(db: Session, analysis: AnalyzedString) -> models.StringRecord:
    """Insert an analyzed string. A duplicate id raises IntegrityError after rollback."""
    record = models.StringRecord(
        id=analysis.id,
        value=analysis.value,
        length=analysis.length,
        is_palindrome=analysis.is_palindrome,
        unique_characters=analysis.unique_characters,
        word_count=analysis.word_count,
        character_frequency_map=dict(analysis.character_frequency_map),
        created_at=analysis.created_at,
    )
    db.add(record)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(record)
    return record


def delete_string(db: Session, string_id: str) -> bool:
    record = get_string(db, string_id)
    if record is None:
        return False
    db.delete(record)
    db.commit()
    return True


def query_strings(db: Session, spec: FilterSpec) -> List[models.StringRecord]:
    query = db.query(models.StringRecord)

    if spec.is_palindrome is not None:
        query = query.filter(models.StringRecord.is_palindrome == spec.is_palindrome)
    if spec.word_count is not None:
        query = query.filter(models.StringRecord.word_count == spec.word_count)
    if spec.min_length is not None:
        query = query.filter(models.StringRecord.length >= spec.min_length)
    if spec.max_length is not None:
        query = query.filter(models.StringRecord.length <= spec.max_length)
    if spec.contains_character is not None:
        query = query.filter(
            func.lower(models.StringRecord.value).contains(
                spec.contains_character.lower(), autoescape=True
            )
        )

    rows = query.order_by(models.StringRecord.created_at.desc()).all()
    logger.debug("query_strings filters=%s -> %d row(s)", spec.as_dict(), len(rows))
    return rows
