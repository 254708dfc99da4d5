"""
FAQ generation endpoints.

POST /generate - generate FAQs from pasted text and store the document.
POST /upload   - extract text from a PDF or DOCX, generate FAQs, store both.
"""
from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path
from typing import Optional

import aiofiles
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from faqgen.config import settings
from faqgen.database import get_db
from faqgen.models.schemas import (
    DocumentSummary,
    FAQItem,
    GenerateRequest,
    GenerateResponse,
)
from faqgen.services.document_parser import (
    DocumentExtractionError,
    DocumentParser,
    EmptyDocumentError,
)
from faqgen.services.document_store import DocumentStore
from faqgen.services.faq_generator import generate_faqs
from faqgen.utils.helpers import safe_remove

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Generate from text
# ---------------------------------------------------------------------------

@router.post("/generate", response_model=GenerateResponse)
async def generate_from_text(
    payload: GenerateRequest,
    db: AsyncSession = Depends(get_db),
) -> GenerateResponse:
    """
    Generate FAQs from pasted text.

    - Text must be at least MIN_TEXT_LENGTH characters after trimming
    - The text and its FAQs are stored as a new document
    """
    text = payload.text
    if not text or not text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Text content is required.",
        )

    if len(text.strip()) < settings.MIN_TEXT_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"Please provide at least {settings.MIN_TEXT_LENGTH} characters "
                "for better FAQ generation."
            ),
        )

    faqs = generate_faqs(text, limit=settings.MAX_FAQS)

    store = DocumentStore(db)
    document = await store.create(text, faqs, title=payload.title or "Text Input")

    return GenerateResponse(
        document=DocumentSummary.from_document(document),
        faqs=[FAQItem(question=f.question, answer=f.answer) for f in faqs],
        message=f"Generated {len(faqs)} FAQs from your content",
    )


# ---------------------------------------------------------------------------
# Generate from an uploaded file
# ---------------------------------------------------------------------------

@router.post(
    "/upload",
    response_model=GenerateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_document(
    file: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
) -> GenerateResponse:
    """
    Upload a PDF or DOCX, extract its text, and generate FAQs.

    - Max file size: 10 MB (configurable via MAX_FILE_SIZE)
    - File is stored with a UUID filename to avoid collisions
    """
    if file is None or not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded.",
        )

    file_ext = Path(file.filename).suffix.lower()
    if file_ext not in settings.SUPPORTED_FILE_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"Unsupported file type '{file_ext}'. "
                f"Accepted: {', '.join(settings.SUPPORTED_FILE_TYPES)}"
            ),
        )

    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    stored_name = f"{uuid.uuid4().hex}{file_ext}"
    file_path = os.path.join(settings.UPLOAD_DIR, stored_name)
    file_size = 0

    try:
        # Stream to disk while enforcing the size limit
        async with aiofiles.open(file_path, "wb") as out:
            while True:
                chunk = await file.read(1024 * 1024)   # 1 MB slices
                if not chunk:
                    break
                file_size += len(chunk)
                if file_size > settings.MAX_FILE_SIZE:
                    raise HTTPException(
                        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        detail=(
                            "File size too large. Maximum size is "
                            f"{settings.MAX_FILE_SIZE // (1024 * 1024)} MB."
                        ),
                    )
                await out.write(chunk)

        logger.info(
            f"Saved {file.filename!r} → {file_path} ({file_size:,} bytes)"
        )

        parser = DocumentParser()
        try:
            parsed_doc = await parser.parse_document(file_path, file_ext)
        except EmptyDocumentError:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Document is empty or contains no extractable text.",
            )
        except DocumentExtractionError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=str(exc),
            )

        content = parsed_doc.full_text
        faqs = generate_faqs(content, limit=settings.MAX_FAQS)

        store = DocumentStore(db)
        document = await store.create(
            content,
            faqs,
            filename=file.filename,
            file_path=file_path,
            file_type=file_ext.lstrip("."),
            metadata=parsed_doc.metadata,
        )

        return GenerateResponse(
            document=DocumentSummary.from_document(document),
            faqs=[FAQItem(question=f.question, answer=f.answer) for f in faqs],
            message=f"Generated {len(faqs)} FAQs from your document",
        )

    except HTTPException:
        safe_remove(file_path)
        raise
    except Exception as exc:
        logger.exception(f"Unexpected error processing {file.filename!r}")
        safe_remove(file_path)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to process file: {exc}",
        )
