from datetime import datetime
from typing import Dict

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from string_analyzer.database import Base


class StringRecord(Base):
    """An analyzed string. The primary key is the SHA-256 of ``value``, so at most
    one row exists per distinct string content."""

    __tablename__ = "strings"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    length: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    is_palindrome: Mapped[bool] = mapped_column(Boolean, nullable=False, index=True)
    unique_characters: Mapped[int] = mapped_column(Integer, nullable=False)
    word_count: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    character_frequency_map: Mapped[Dict[str, int]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), index=True
    )
