"""Shared state access and helpers for the HTTP routers."""

from __future__ import annotations

from fastapi import HTTPException, Request

from core.exceptions import (
    GenerationFailure,
    NotFoundError,
    OperationInProgressError,
    QuizSubmittedError,
    ReadinessFailure,
    StudyBuddyError,
)
from core.session import SessionContext

# =============================================================================
# ERROR MAPPING
# =============================================================================

# Ordem importa: subclasses antes das classes base
STATUS_CODES: list[tuple[type[StudyBuddyError], int]] = [
    (ReadinessFailure, 400),
    (NotFoundError, 404),
    (OperationInProgressError, 409),
    (QuizSubmittedError, 409),
    (GenerationFailure, 502),
]


def status_for(error: StudyBuddyError) -> int:
    for error_type, status_code in STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 500


def http_error(error: StudyBuddyError) -> HTTPException:
    """Converte erro de dominio em HTTPException com detalhe estruturado."""
    return HTTPException(status_code=status_for(error), detail=error.to_dict())


# =============================================================================
# SESSION ACCESS
# =============================================================================


def get_session(request: Request) -> SessionContext:
    """Dependency: contexto da sessao aberto no lifespan do app."""
    session = getattr(request.app.state, "session", None)
    if session is None or session.closed:
        raise HTTPException(status_code=503, detail="Session not initialized")
    return session
