"""Core module - Configuracao, excecoes e contexto de sessao."""

from .config import StudyBuddyConfig, get_config, reset_config
from .exceptions import (
    GenerationFailure,
    MalformedOutputFailure,
    NotFoundError,
    OperationInProgressError,
    PersistFailure,
    QuizSubmittedError,
    ReadinessFailure,
    StudyBuddyError,
    TransportFailure,
)

__all__ = [
    # Config
    "StudyBuddyConfig",
    "get_config",
    "reset_config",
    # Exceptions
    "StudyBuddyError",
    "GenerationFailure",
    "TransportFailure",
    "MalformedOutputFailure",
    "ReadinessFailure",
    "PersistFailure",
    "OperationInProgressError",
    "QuizSubmittedError",
    "NotFoundError",
]
