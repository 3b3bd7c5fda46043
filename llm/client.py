"""Structured Generation Client - Chamada ao modelo com retry e validacao."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from pydantic import BaseModel

from core.exceptions import GenerationFailure, MalformedOutputFailure, TransportFailure

from .decoder import Ok, ParseError, decode
from .transport import (
    ContentPart,
    GenerationRequest,
    GenerationTransport,
    SourceCitation,
)

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Resultado de uma chamada: valor validado ou falha tipada."""

    value: Any = None
    sources: list[SourceCitation] = field(default_factory=list)
    failure: GenerationFailure | None = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.failure is None


class StructuredGenerationClient:
    """Wrapper sem estado sobre o transporte de geracao.

    Toda chamada passa por ate ``max_attempts`` tentativas. Falhas de
    transporte e de interpretacao sao tratadas igualmente: espera
    ``backoff_base * 2 ** (n - 1)`` segundos e tenta de novo. Esgotadas as
    tentativas, devolve um GenerationResult com ``failure`` preenchido.
    Nunca propaga excecao.

    Single-flight por alvo e responsabilidade de quem chama.

    Example:
        >>> client = StructuredGenerationClient(transport)
        >>> result = await client.request(
        ...     [ContentPart("user", "Generate...")],
        ...     system_instruction="...",
        ...     output_schema=QuizPayload,
        ... )
        >>> if result.ok:
        ...     payload = result.value
    """

    MAX_ATTEMPTS = 3
    BACKOFF_BASE = 1.0

    def __init__(
        self,
        transport: GenerationTransport,
        max_attempts: int = MAX_ATTEMPTS,
        backoff_base: float = BACKOFF_BASE,
        sleep: Callable[[float], Awaitable[Any]] | None = None,
    ):
        self.transport = transport
        self.max_attempts = max(1, max_attempts)
        self.backoff_base = backoff_base
        self._sleep = sleep or asyncio.sleep

    def backoff_delay(self, attempt: int) -> float:
        """Espera apos a tentativa ``attempt`` (1-based)."""
        return self.backoff_base * (2 ** (attempt - 1))

    async def request(
        self,
        contents: list[ContentPart],
        system_instruction: str | None = None,
        output_schema: type[BaseModel] | None = None,
        tools: list[str] | None = None,
        validation_context: dict[str, Any] | None = None,
    ) -> GenerationResult:
        """Executa a chamada com retry e validacao local.

        Args:
            contents: Turnos enviados ao modelo, em ordem
            system_instruction: Instrucao de sistema
            output_schema: Modelo Pydantic esperado (None = texto livre)
            tools: Ferramentas externas (ex: ["google_search"])
            validation_context: Contexto extra para os validadores do schema

        Returns:
            GenerationResult com valor ou falha
        """
        generation_request = GenerationRequest(
            contents=list(contents),
            system_instruction=system_instruction,
            output_schema=output_schema,
            tools=list(tools or []),
        )

        failure: GenerationFailure | None = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                response = await self.transport.generate(generation_request)
            except TransportFailure as e:
                failure = e
            except Exception as e:
                failure = TransportFailure(
                    message=f"Erro inesperado no transporte: {e}",
                    details={"type": type(e).__name__},
                )
            else:
                decoded = decode(response.text, output_schema, validation_context)
                if isinstance(decoded, Ok):
                    if attempt > 1:
                        logger.info(f"Geracao bem-sucedida na tentativa {attempt}")
                    return GenerationResult(
                        value=decoded.value,
                        sources=response.sources,
                        attempts=attempt,
                    )

                kind = "parse" if isinstance(decoded, ParseError) else "schema"
                failure = MalformedOutputFailure(
                    message=decoded.message,
                    details={"kind": kind, "errors": getattr(decoded, "errors", [])},
                )

            logger.warning(
                f"Tentativa {attempt}/{self.max_attempts} falhou: "
                f"{type(failure).__name__}: {failure.message}"
            )

            if attempt < self.max_attempts:
                await self._sleep(self.backoff_delay(attempt))

        logger.error(f"Geracao falhou apos {self.max_attempts} tentativas")
        return GenerationResult(failure=failure, attempts=self.max_attempts)
