"""Quiz Router - Endpoints FastAPI."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from app_state import get_session, http_error
from core.exceptions import StudyBuddyError
from core.session import SessionContext

from .models.schemas import (
    AnswerRequest,
    GenerateQuizRequest,
    QuestionSet,
    ScoreReport,
    SubmitQuizRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quiz", tags=["Quiz"])

# Campos ocultos ate a submissao
_HIDDEN_FIELDS = {"questions": {"__all__": {"canonical_answer", "model_answer", "explanation"}}}


def public_view(question_set: QuestionSet | None) -> dict[str, Any] | None:
    """QuestionSet sem as respostas de referencia."""
    if question_set is None:
        return None
    return question_set.model_dump(mode="json", exclude=_HIDDEN_FIELDS)


# =============================================================================
# GERACAO
# =============================================================================


@router.post("/generate")
async def generate_quiz(
    request: GenerateQuizRequest,
    session: SessionContext = Depends(get_session),
):
    """Gera um novo quiz a partir do documento ativo.

    - 400 se o documento ainda nao tem texto suficiente
    - 409 se ja existe geracao em andamento
    - 502 se o modelo falhar apos as tentativas
    """
    try:
        question_set = await session.quiz.generate(session.documents.active_text, request.kind)
    except StudyBuddyError as e:
        logger.warning(f"Quiz nao gerado: {e.message}")
        raise http_error(e) from e

    return public_view(question_set)


@router.get("/current")
async def get_current_quiz(session: SessionContext = Depends(get_session)):
    """Retorna o quiz atual, respostas, resultado e ultima falha de geracao."""
    return session.quiz.state.to_dict(exclude=_HIDDEN_FIELDS)


@router.delete("/current")
async def discard_quiz(session: SessionContext = Depends(get_session)):
    """Descarta o quiz atual."""
    session.quiz.discard()
    return {"success": True}


# =============================================================================
# RESPOSTAS E SUBMISSAO
# =============================================================================


@router.put("/answers")
async def record_answer(
    request: AnswerRequest,
    session: SessionContext = Depends(get_session),
):
    """Registra a resposta de uma pergunta (409 apos submissao)."""
    try:
        session.quiz.answer(request.question_id, request.answer)
    except StudyBuddyError as e:
        raise http_error(e) from e

    return {"answers": dict(session.quiz.state.answers)}


@router.post("/submit", response_model=ScoreReport)
async def submit_quiz(
    request: SubmitQuizRequest,
    session: SessionContext = Depends(get_session),
):
    """Pontua o quiz atual e registra a tentativa no historico."""
    try:
        return session.quiz.submit(answers=request.answers)
    except StudyBuddyError as e:
        raise http_error(e) from e
