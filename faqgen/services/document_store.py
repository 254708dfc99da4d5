"""
Persistence for documents and their generated FAQ sets.

Thin wrapper around an AsyncSession so routers never build queries directly.
Unknown identifiers raise DocumentNotFoundError.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from faqgen.config import settings
from faqgen.models.database_models import Document
from faqgen.services.faq_generator import FAQ
from faqgen.utils.helpers import content_preview, count_words, safe_remove

logger = logging.getLogger(__name__)


class DocumentNotFoundError(LookupError):
    """No document exists with the requested id."""

    def __init__(self, document_id: str) -> None:
        super().__init__(f"Document {document_id} not found.")
        self.document_id = document_id


class DocumentStore:
    """CRUD operations over the ``documents`` table."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(
        self,
        content: str,
        faqs: Sequence[FAQ],
        *,
        title: Optional[str] = None,
        filename: Optional[str] = None,
        file_path: Optional[str] = None,
        file_type: str = "text",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Document:
        """Persist a new document with its FAQ set and derived statistics."""
        document = Document(
            title=title,
            filename=filename,
            file_path=file_path,
            file_type=file_type,
            content_text=content,
            content_preview=content_preview(content, settings.CONTENT_PREVIEW_LENGTH),
            word_count=count_words(content),
            character_count=len(content),
            faqs_json=[faq.to_dict() for faq in faqs],
            metadata_json=metadata,
        )
        self.db.add(document)
        await self.db.commit()
        await self.db.refresh(document)

        logger.info(
            "Stored document id=%s (%r) with %d FAQs",
            document.id,
            document.display_title,
            len(faqs),
        )
        return document

    async def list(self) -> List[Document]:
        """All documents, newest first."""
        result = await self.db.execute(
            select(Document).order_by(Document.uploaded_at.desc())
        )
        return list(result.scalars().all())

    async def get(self, document_id: str) -> Document:
        result = await self.db.execute(
            select(Document).where(Document.id == document_id)
        )
        document = result.scalar_one_or_none()
        if document is None:
            raise DocumentNotFoundError(document_id)
        return document

    async def delete(self, document_id: str) -> None:
        """Delete the document row and its stored upload, if any."""
        document = await self.get(document_id)
        file_path = document.file_path

        await self.db.delete(document)
        await self.db.commit()
        safe_remove(file_path)

        logger.info(f"Deleted document id={document_id} ({document.display_title!r})")

    async def replace_faqs(self, document_id: str, faqs: Sequence[FAQ]) -> Document:
        """Overwrite the stored FAQ set of a document."""
        document = await self.get(document_id)
        document.faqs_json = [faq.to_dict() for faq in faqs]
        await self.db.commit()
        await self.db.refresh(document)

        logger.info("Replaced FAQs for document id=%s (%d FAQs)", document_id, len(faqs))
        return document
