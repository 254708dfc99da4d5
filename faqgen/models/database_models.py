"""
SQLAlchemy ORM models for the FAQ generator database.
"""
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    JSON,
)
from datetime import datetime, timezone
import uuid

from faqgen.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Document(Base):
    """Pasted text or uploaded file together with its generated FAQ set."""

    __tablename__ = "documents"

    id = Column(String(36), primary_key=True, default=_new_id)
    title = Column(String(255), nullable=True)
    filename = Column(String(255), nullable=True)   # original upload name
    file_path = Column(String(512), nullable=True)  # UUID-based path on disk
    file_type = Column(String(50), nullable=False, default="text")  # text, pdf, docx
    content_text = Column(Text, nullable=True)  # Full extracted text
    content_preview = Column(Text, nullable=False, default="")
    word_count = Column(Integer, nullable=False, default=0)
    character_count = Column(Integer, nullable=False, default=0)
    faqs_json = Column(JSON, nullable=False, default=list)  # [{"question", "answer"}, ...]
    metadata_json = Column(JSON, nullable=True)  # Author, page count, etc.
    # Set client-side for microsecond ordering on SQLite
    uploaded_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)

    @property
    def display_title(self) -> str:
        return self.title or self.filename or "Untitled"

    @property
    def faq_count(self) -> int:
        return len(self.faqs_json or [])
