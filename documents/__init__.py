"""Documents Module - Documentos de estudo da sessao."""

from .library import (
    BUILTIN_DOCUMENT_ID,
    BUILTIN_DOCUMENT_TEXT,
    Document,
    DocumentLibrary,
    DocumentOrigin,
    ExtractionStatus,
    TextExtractor,
)

__all__ = [
    "BUILTIN_DOCUMENT_ID",
    "BUILTIN_DOCUMENT_TEXT",
    "Document",
    "DocumentLibrary",
    "DocumentOrigin",
    "ExtractionStatus",
    "TextExtractor",
]
