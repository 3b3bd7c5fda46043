"""Configuracao centralizada carregada de variaveis de ambiente."""

import os
from dataclasses import dataclass

DEFAULT_MODEL = "gemini-2.5-flash"


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value else default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


@dataclass
class StudyBuddyConfig:
    """Configuracao do nucleo.

    Attributes:
        api_key: Chave da API Gemini (GOOGLE_API_KEY)
        model: Modelo usado em todas as chamadas de geracao
        max_attempts: Total de tentativas por chamada (inclui a primeira)
        backoff_base: Espera inicial entre tentativas, em segundos (dobra a cada falha)
        context_char_limit: Limite de caracteres do documento injetado no chat
        min_document_chars: Tamanho minimo do documento para gerar quiz
        app_id: Namespace das colecoes no document store
        agentfs_id: ID da instancia AgentFS usada como document store
        user_id: ID fixo do usuario (vazio = gerar um por sessao)
        log_level: Nivel do logger raiz
    """

    api_key: str | None = None
    model: str = DEFAULT_MODEL
    max_attempts: int = 3
    backoff_base: float = 1.0
    context_char_limit: int = 2500
    min_document_chars: int = 50
    app_id: str = "study-buddy-app"
    agentfs_id: str = "study-buddy"
    user_id: str | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "StudyBuddyConfig":
        """Cria configuracao a partir do ambiente."""
        return cls(
            api_key=os.getenv("GOOGLE_API_KEY") or None,
            model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            max_attempts=_env_int("GENERATION_MAX_ATTEMPTS", 3),
            backoff_base=_env_float("GENERATION_BACKOFF_BASE", 1.0),
            context_char_limit=_env_int("CONTEXT_CHAR_LIMIT", 2500),
            min_document_chars=_env_int("QUIZ_MIN_DOCUMENT_CHARS", 50),
            app_id=os.getenv("APP_ID", "study-buddy-app"),
            agentfs_id=os.getenv("AGENTFS_ID", "study-buddy"),
            user_id=os.getenv("STUDY_BUDDY_USER_ID") or None,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


_config: StudyBuddyConfig | None = None


def get_config() -> StudyBuddyConfig:
    """Retorna instancia singleton da configuracao."""
    global _config
    if _config is None:
        _config = StudyBuddyConfig.from_env()
    return _config


def reset_config() -> None:
    """Descarta a configuracao em cache (usado em testes)."""
    global _config
    _config = None
