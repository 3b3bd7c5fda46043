"""LLM Client Factory - Criacao do StructuredGenerationClient."""

from core.config import StudyBuddyConfig, get_config

from .client import StructuredGenerationClient
from .transport import GeminiTransport, GenerationTransport


class LLMClientFactory:
    """Factory para criar o cliente de geracao a partir da configuracao.

    Centraliza:
    - Selecao do modelo Gemini
    - Orcamento de tentativas e backoff
    - Injecao de transporte (testes usam transporte falso)

    Example:
        >>> client = LLMClientFactory.create_client()
        >>> result = await client.request([...])
    """

    DEFAULT_MODEL = "gemini-2.5-flash"

    @staticmethod
    def create_transport(config: StudyBuddyConfig) -> GeminiTransport:
        """Cria o transporte Gemini configurado."""
        return GeminiTransport(
            api_key=config.api_key,
            model=config.model or LLMClientFactory.DEFAULT_MODEL,
        )

    @classmethod
    def create_client(
        cls,
        config: StudyBuddyConfig | None = None,
        transport: GenerationTransport | None = None,
    ) -> StructuredGenerationClient:
        """Cria cliente com retry configurado.

        Args:
            config: Configuracao (padrao: ambiente)
            transport: Transporte customizado (padrao: Gemini)

        Returns:
            StructuredGenerationClient pronto para uso
        """
        config = config or get_config()
        return StructuredGenerationClient(
            transport=transport or cls.create_transport(config),
            max_attempts=config.max_attempts,
            backoff_base=config.backoff_base,
        )
