"""Transporte de geracao - Adaptador do provedor Gemini (google-genai)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as gx
from pydantic import BaseModel

from core.exceptions import TransportFailure

logger = logging.getLogger(__name__)

GOOGLE_SEARCH_TOOL = "google_search"

# Papeis locais -> papeis do provedor
_ROLE_MAP = {"user": "user", "assistant": "model"}


@dataclass(frozen=True)
class ContentPart:
    """Turno de conversa enviado ao modelo."""

    role: str
    text: str


@dataclass(frozen=True)
class SourceCitation:
    """Fonte externa atribuida pela busca (grounding)."""

    uri: str
    title: str = ""


@dataclass
class GenerationRequest:
    """Requisicao independente de provedor."""

    contents: list[ContentPart]
    system_instruction: str | None = None
    output_schema: type[BaseModel] | None = None
    tools: list[str] = field(default_factory=list)


@dataclass
class GenerationResponse:
    """Texto gerado mais fontes de grounding (se houver)."""

    text: str | None
    sources: list[SourceCitation] = field(default_factory=list)


class GenerationTransport(Protocol):
    async def generate(self, request: GenerationRequest) -> GenerationResponse: ...


def extract_grounding_sources(response: Any) -> list[SourceCitation]:
    """Mapeia grounding chunks da resposta para SourceCitation.

    Entradas sem uri utilizavel sao descartadas.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []

    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    sources = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None)
        if not uri:
            continue
        sources.append(SourceCitation(uri=uri, title=getattr(web, "title", None) or ""))
    return sources


class GeminiTransport:
    """Chamada real ao Gemini via google-genai (API async).

    Quando ha ferramentas declaradas o schema NAO e enviado ao provedor
    (o Gemini rejeita busca + JSON mode na mesma chamada); o formato ainda
    e exigido pelo prompt e validado localmente pelo decoder.

    Example:
        >>> transport = GeminiTransport(api_key="...", model="gemini-2.5-flash")
        >>> response = await transport.generate(GenerationRequest(contents=[...]))
    """

    def __init__(self, api_key: str | None, model: str, client: genai.Client | None = None):
        self.model = model
        self._client = client or genai.Client(api_key=api_key)

    def build_config(self, request: GenerationRequest) -> gx.GenerateContentConfig:
        """Monta GenerateContentConfig a partir da requisicao."""
        options: dict[str, Any] = {}

        if request.system_instruction:
            options["system_instruction"] = request.system_instruction

        if GOOGLE_SEARCH_TOOL in request.tools:
            options["tools"] = [gx.Tool(google_search=gx.GoogleSearch())]
        elif request.output_schema is not None:
            options["response_mime_type"] = "application/json"
            options["response_schema"] = request.output_schema

        return gx.GenerateContentConfig(**options)

    def build_contents(self, request: GenerationRequest) -> list[gx.Content]:
        return [
            gx.Content(
                role=_ROLE_MAP.get(part.role, "user"),
                parts=[gx.Part(text=part.text)],
            )
            for part in request.contents
        ]

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=self.build_contents(request),
                config=self.build_config(request),
            )
        except genai_errors.APIError as e:
            raise TransportFailure(
                message=f"Gemini respondeu com erro {e.code}",
                details={"status": e.status, "model": self.model},
            ) from e
        except httpx.HTTPError as e:
            raise TransportFailure(
                message=f"Falha de rede ao chamar Gemini: {e}",
                details={"model": self.model},
            ) from e

        return GenerationResponse(
            text=response.text,
            sources=extract_grounding_sources(response),
        )
