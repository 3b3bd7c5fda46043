"""Excecoes do Study Buddy.

Hierarquia:
    StudyBuddyError
    ├── GenerationFailure
    │   ├── TransportFailure        (rede / resposta nao-sucesso)
    │   └── MalformedOutputFailure  (texto nao bate com a estrutura esperada)
    ├── ReadinessFailure            (pre-condicoes nao atendidas)
    ├── PersistFailure              (escrita rejeitada pelo store)
    ├── OperationInProgressError    (alvo ja tem operacao em andamento)
    ├── QuizSubmittedError          (edicao apos submissao)
    └── NotFoundError
"""

from typing import Any


class StudyBuddyError(Exception):
    """Erro base com mensagem e detalhes estruturados."""

    def __init__(self, message: str = "", details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class GenerationFailure(StudyBuddyError):
    """Falha de geracao apos esgotar as tentativas."""


class TransportFailure(GenerationFailure):
    """Erro de rede ou resposta HTTP sem sucesso do provedor."""


class MalformedOutputFailure(GenerationFailure):
    """Texto retornado nao pode ser interpretado na estrutura declarada."""


class ReadinessFailure(StudyBuddyError):
    """Pre-condicoes nao atendidas (ex: documento curto demais)."""


class PersistFailure(StudyBuddyError):
    """Escrita rejeitada pelo document store."""


class OperationInProgressError(StudyBuddyError):
    """Ja existe uma operacao em andamento para o mesmo alvo."""


class QuizSubmittedError(StudyBuddyError):
    """Quiz ja submetido - respostas nao podem mais ser editadas."""


class NotFoundError(StudyBuddyError):
    """Recurso nao encontrado (thread, documento, pergunta)."""
