"""
Pydantic schemas for request/response validation.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime


# FAQ Schemas
class FAQItem(BaseModel):
    """A single generated question–answer pair."""

    question: str
    answer: str

    model_config = ConfigDict(from_attributes=True)


# Request Schemas
class GenerateRequest(BaseModel):
    """Schema for generating FAQs from pasted text."""

    text: Optional[str] = None
    title: Optional[str] = Field(None, max_length=255)


# Document Schemas
class DocumentSummary(BaseModel):
    """Document details returned alongside generated FAQs."""

    id: str
    title: str
    file_type: str
    uploaded_at: datetime
    content_preview: str
    word_count: int
    character_count: int

    @classmethod
    def from_document(cls, document) -> "DocumentSummary":
        return cls(
            id=document.id,
            title=document.display_title,
            file_type=document.file_type,
            uploaded_at=document.uploaded_at,
            content_preview=document.content_preview,
            word_count=document.word_count,
            character_count=document.character_count,
        )


class DocumentListItem(BaseModel):
    """Schema for one row of the document list."""

    id: str
    title: str
    uploaded_at: datetime
    content_preview: str
    faq_count: int
    word_count: int

    @classmethod
    def from_document(cls, document) -> "DocumentListItem":
        return cls(
            id=document.id,
            title=document.display_title,
            uploaded_at=document.uploaded_at,
            content_preview=document.content_preview,
            faq_count=document.faq_count,
            word_count=document.word_count,
        )


# Response Schemas
class GenerateResponse(BaseModel):
    """Schema for POST /api/generate and POST /api/upload."""

    success: bool = True
    document: DocumentSummary
    faqs: List[FAQItem]
    message: str


class DocumentListResponse(BaseModel):
    success: bool = True
    documents: List[DocumentListItem]


class DocumentDetailResponse(BaseModel):
    success: bool = True
    document: DocumentSummary
    faqs: List[FAQItem]


class RegenerateResponse(BaseModel):
    success: bool = True
    faqs: List[FAQItem]
    message: str


class MessageResponse(BaseModel):
    success: bool = True
    message: str


# Health Check Schema
class HealthCheckResponse(BaseModel):
    """Schema for health check response."""

    status: str
    database: str
    timestamp: datetime
