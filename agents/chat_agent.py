"""ChatSessionManager - Conversas multi-thread com o tutor virtual.

Este modulo encapsula a logica de chat:
- Mapa de threads da sessao (apenas em memoria)
- Gate de ocupado por thread
- Montagem do contexto via ContextAssembler
- Fallback fixo quando a geracao falha
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any

from core.exceptions import NotFoundError, OperationInProgressError
from llm import ContentPart, SourceCitation, StructuredGenerationClient

from .context_assembler import ContextAssembler

logger = logging.getLogger(__name__)

DEFAULT_THREAD_NAME = "Physics Revision Chat"
EMPTY_REPLY = "Sorry, I couldn't generate a response."
FALLBACK_REPLY = "I'm having trouble connecting right now. Please try again later."


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class Message:
    """Mensagem de uma thread."""

    role: str  # "user" | "assistant"
    text: str
    sources: list[SourceCitation] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "role": self.role,
            "text": self.text,
            "sources": [{"uri": s.uri, "title": s.title} for s in self.sources],
        }


@dataclass
class ChatThread:
    """Thread de conversa com historico em ordem de chegada."""

    id: str
    name: str
    messages: list[Message] = field(default_factory=list)
    busy: bool = False

    def history(self) -> list[ContentPart]:
        return [ContentPart(role=m.role, text=m.text) for m in self.messages]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "busy": self.busy,
            "messages": [m.to_dict() for m in self.messages],
        }


# =============================================================================
# ChatSessionManager
# =============================================================================


class ChatSessionManager:
    """Gerencia as threads de chat de uma sessao.

    Uma chamada ``send`` por thread de cada vez; threads diferentes rodam
    em paralelo no mesmo event loop.

    Example:
        >>> chat = ChatSessionManager(client)
        >>> thread_id = chat.create_thread()
        >>> thread = await chat.send(thread_id, "What is unification?", document_text)
        >>> print(thread.messages[-1].text)
    """

    def __init__(
        self,
        client: StructuredGenerationClient,
        assembler: ContextAssembler | None = None,
        create_default: bool = True,
    ):
        self.client = client
        self.assembler = assembler or ContextAssembler()
        self._threads: dict[str, ChatThread] = {}

        if create_default:
            self.create_thread(DEFAULT_THREAD_NAME)

    def create_thread(self, name: str | None = None) -> str:
        """Cria uma thread vazia e retorna seu ID."""
        thread_id = uuid.uuid4().hex
        name = name or f"New Chat {len(self._threads) + 1}"
        self._threads[thread_id] = ChatThread(id=thread_id, name=name)
        logger.debug(f"Thread criada: {thread_id} ({name})")
        return thread_id

    def get_thread(self, thread_id: str) -> ChatThread:
        thread = self._threads.get(thread_id)
        if thread is None:
            raise NotFoundError(message=f"Chat thread not found: {thread_id}")
        return thread

    def list_threads(self) -> list[ChatThread]:
        return list(self._threads.values())

    async def send(self, thread_id: str, text: str, document_text: str = "") -> ChatThread:
        """Envia uma mensagem e aguarda a resposta do tutor.

        A mensagem do usuario entra no historico antes da chamada e nunca e
        removida. Falhas de geracao viram a mensagem de fallback.

        Args:
            thread_id: Thread alvo
            text: Mensagem do usuario (em branco = nada acontece)
            document_text: Texto do documento ativo ("" = nenhum)

        Returns:
            A thread atualizada

        Raises:
            NotFoundError: Thread inexistente
            OperationInProgressError: Thread ocupada com outro envio
        """
        thread = self.get_thread(thread_id)

        if not text or not text.strip():
            return thread

        if thread.busy:
            raise OperationInProgressError(
                message="A reply is already pending for this thread",
                details={"thread_id": thread_id},
            )

        history = thread.history()
        thread.messages.append(Message(role="user", text=text))
        thread.busy = True

        try:
            request = self.assembler.build(document_text, history, text)
            result = await self.client.request(
                request.contents,
                system_instruction=request.system_instruction,
                tools=request.tools,
            )

            if result.ok:
                reply = result.value or EMPTY_REPLY
                sources = (
                    [s for s in result.sources if s.uri] if request.use_external_tool else []
                )
                thread.messages.append(Message(role="assistant", text=reply, sources=sources))
            else:
                logger.warning(f"Chat {thread_id}: geracao falhou ({result.failure.message})")
                thread.messages.append(Message(role="assistant", text=FALLBACK_REPLY))

        except Exception as e:
            logger.exception(f"Chat {thread_id}: erro inesperado: {e}")
            thread.messages.append(Message(role="assistant", text=FALLBACK_REPLY))

        finally:
            thread.busy = False

        return thread
