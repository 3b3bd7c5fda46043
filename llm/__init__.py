"""LLM Module - Cliente de geracao estruturada.

Arquitetura:
- transport.py: GeminiTransport (google-genai) e tipos da requisicao
- decoder.py: Segunda validacao (Ok | ParseError | SchemaViolation)
- client.py: StructuredGenerationClient (retry/backoff)
- factory.py: LLMClientFactory
"""

from .client import GenerationResult, StructuredGenerationClient
from .decoder import DecodeResult, Ok, ParseError, SchemaViolation, decode, extract_json
from .factory import LLMClientFactory
from .transport import (
    GOOGLE_SEARCH_TOOL,
    ContentPart,
    GeminiTransport,
    GenerationRequest,
    GenerationResponse,
    GenerationTransport,
    SourceCitation,
)

__all__ = [
    # Transport
    "ContentPart",
    "SourceCitation",
    "GenerationRequest",
    "GenerationResponse",
    "GenerationTransport",
    "GeminiTransport",
    "GOOGLE_SEARCH_TOOL",
    # Decoder
    "DecodeResult",
    "Ok",
    "ParseError",
    "SchemaViolation",
    "decode",
    "extract_json",
    # Client
    "GenerationResult",
    "StructuredGenerationClient",
    "LLMClientFactory",
]
