"""Session Context - Inicializacao e encerramento explicitos dos componentes.

Substitui estado global: cada sessao de usuario tem seu proprio contexto,
aberto com ``SessionContext.open`` e fechado com ``close`` (ou via
``async with``).
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from .config import StudyBuddyConfig, get_config

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

    from agents import ChatSessionManager, VideoRecommender
    from documents import DocumentLibrary, TextExtractor
    from llm import GenerationTransport, StructuredGenerationClient
    from progress import AttemptStore, ProgressSynchronizer
    from quiz import QuizEngine

logger = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    """Fornece o ID do usuario autenticado."""

    def get_user_id(self) -> str: ...


class StaticIdentity:
    """Identidade fixa: ID configurado ou UUID gerado por sessao."""

    def __init__(self, user_id: str | None = None):
        self.user_id = user_id or uuid.uuid4().hex

    def get_user_id(self) -> str:
        return self.user_id


@dataclass
class SessionContext:
    """Componentes de uma sessao de usuario."""

    config: StudyBuddyConfig
    user_id: str
    client: StructuredGenerationClient
    documents: DocumentLibrary
    quiz: QuizEngine
    chat: ChatSessionManager
    progress: ProgressSynchronizer
    recommender: VideoRecommender
    store: AttemptStore
    agentfs: Any = None
    owns_agentfs: bool = False
    closed: bool = False

    @classmethod
    async def open(
        cls,
        config: StudyBuddyConfig | None = None,
        identity: IdentityProvider | None = None,
        agentfs: AgentFS | None = None,
        transport: GenerationTransport | None = None,
        extractor: TextExtractor | None = None,
    ) -> SessionContext:
        """Abre a sessao e conecta todos os componentes.

        Args:
            config: Configuracao (padrao: ambiente)
            identity: Provedor de identidade (padrao: StaticIdentity)
            agentfs: Instancia AgentFS ja aberta (padrao: abre uma nova)
            transport: Transporte de geracao (padrao: Gemini)
            extractor: Extrator de texto para uploads

        Returns:
            SessionContext pronto para uso
        """
        from agents import ChatSessionManager, ContextAssembler, VideoRecommender
        from documents import DocumentLibrary
        from llm import LLMClientFactory
        from progress import AttemptStore, ProgressSynchronizer
        from quiz import QuizEngine

        config = config or get_config()
        identity = identity or StaticIdentity(config.user_id)
        user_id = identity.get_user_id()

        owns_agentfs = agentfs is None
        if owns_agentfs:
            from agentfs_sdk import AgentFS, AgentFSOptions

            agentfs = await AgentFS.open(AgentFSOptions(id=config.agentfs_id))

        client = LLMClientFactory.create_client(config, transport=transport)
        store = AttemptStore(agentfs, app_id=config.app_id)
        progress = ProgressSynchronizer(store, user_id=user_id)

        session = cls(
            config=config,
            user_id=user_id,
            client=client,
            documents=DocumentLibrary(extractor),
            quiz=QuizEngine(
                client,
                attempt_sink=progress.record,
                min_document_chars=config.min_document_chars,
            ),
            chat=ChatSessionManager(
                client,
                assembler=ContextAssembler(char_limit=config.context_char_limit),
            ),
            progress=progress,
            recommender=VideoRecommender(client),
            store=store,
            agentfs=agentfs,
            owns_agentfs=owns_agentfs,
        )
        logger.info(f"Sessao aberta para {user_id} (modelo {config.model})")
        return session

    async def close(self) -> None:
        """Libera assinaturas, aguarda escritas e fecha o AgentFS proprio."""
        if self.closed:
            return
        self.closed = True

        await self.progress.close()

        if self.owns_agentfs and self.agentfs is not None:
            await self.agentfs.close()

        logger.info(f"Sessao encerrada para {self.user_id}")

    async def __aenter__(self) -> SessionContext:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
