"""
Document management endpoints.

GET    /                 - list documents, newest first.
GET    /{id}             - document details + stored FAQs.
DELETE /{id}             - delete document and its uploaded file.
POST   /{id}/regenerate  - rerun FAQ generation on the stored text.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from faqgen.config import settings
from faqgen.database import get_db
from faqgen.models.database_models import Document
from faqgen.models.schemas import (
    DocumentDetailResponse,
    DocumentListItem,
    DocumentListResponse,
    DocumentSummary,
    FAQItem,
    MessageResponse,
    RegenerateResponse,
)
from faqgen.services.document_store import DocumentNotFoundError, DocumentStore
from faqgen.services.faq_generator import generate_faqs

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_or_404(store: DocumentStore, document_id: str) -> Document:
    try:
        return await store.get(document_id)
    except DocumentNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found.",
        )


# ---------------------------------------------------------------------------
# List
# ---------------------------------------------------------------------------

@router.get("", response_model=DocumentListResponse, include_in_schema=False)
@router.get("/", response_model=DocumentListResponse)
async def list_documents(db: AsyncSession = Depends(get_db)) -> DocumentListResponse:
    """List all documents, newest first."""
    documents = await DocumentStore(db).list()
    return DocumentListResponse(
        documents=[DocumentListItem.from_document(doc) for doc in documents]
    )


# ---------------------------------------------------------------------------
# Get by ID
# ---------------------------------------------------------------------------

@router.get("/{document_id}", response_model=DocumentDetailResponse)
async def get_document(
    document_id: str,
    db: AsyncSession = Depends(get_db),
) -> DocumentDetailResponse:
    """Return a document summary and its stored FAQs."""
    document = await _get_or_404(DocumentStore(db), document_id)
    return DocumentDetailResponse(
        document=DocumentSummary.from_document(document),
        faqs=[FAQItem(**faq) for faq in document.faqs_json or []],
    )


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

@router.delete("/{document_id}", response_model=MessageResponse)
async def delete_document(
    document_id: str,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """Delete a document and its uploaded file from disk."""
    try:
        await DocumentStore(db).delete(document_id)
    except DocumentNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found.",
        )
    return MessageResponse(message="Document deleted successfully")


# ---------------------------------------------------------------------------
# Regenerate
# ---------------------------------------------------------------------------

@router.post("/{document_id}/regenerate", response_model=RegenerateResponse)
async def regenerate_faqs(
    document_id: str,
    db: AsyncSession = Depends(get_db),
) -> RegenerateResponse:
    """Rerun FAQ generation on the stored text and replace the FAQ set."""
    store = DocumentStore(db)
    document = await _get_or_404(store, document_id)

    if not document.content_text:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to retrieve document content.",
        )

    faqs = generate_faqs(document.content_text, limit=settings.MAX_FAQS)
    await store.replace_faqs(document_id, faqs)

    return RegenerateResponse(
        faqs=[FAQItem(question=f.question, answer=f.answer) for f in faqs],
        message=f"Regenerated {len(faqs)} FAQs",
    )
