"""Database and schema models for the FAQ generator."""
from faqgen.models.database_models import Document
from faqgen.models.schemas import (
    FAQItem,
    GenerateRequest,
    DocumentSummary,
    DocumentListItem,
    GenerateResponse,
    DocumentListResponse,
    DocumentDetailResponse,
    RegenerateResponse,
    MessageResponse,
    HealthCheckResponse,
)

__all__ = [
    # Database models
    "Document",
    # Pydantic schemas
    "FAQItem",
    "GenerateRequest",
    "DocumentSummary",
    "DocumentListItem",
    "GenerateResponse",
    "DocumentListResponse",
    "DocumentDetailResponse",
    "RegenerateResponse",
    "MessageResponse",
    "HealthCheckResponse",
]
