"""Chat endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app_state import get_session, http_error
from core.exceptions import StudyBuddyError
from core.session import SessionContext

router = APIRouter(prefix="/chat", tags=["Chat"])
logger = logging.getLogger(__name__)


class CreateThreadRequest(BaseModel):
    name: str | None = None


class SendMessageRequest(BaseModel):
    message: str


@router.get("/threads")
async def list_threads(session: SessionContext = Depends(get_session)):
    """Lista as threads da sessao (sem mensagens)."""
    threads = session.chat.list_threads()
    return {
        "total": len(threads),
        "threads": [
            {"id": t.id, "name": t.name, "busy": t.busy, "messages": len(t.messages)}
            for t in threads
        ],
    }


@router.post("/threads", status_code=201)
async def create_thread(
    request: CreateThreadRequest,
    session: SessionContext = Depends(get_session),
):
    """Cria uma nova thread vazia."""
    thread_id = session.chat.create_thread(request.name)
    return session.chat.get_thread(thread_id).to_dict()


@router.get("/threads/{thread_id}")
async def get_thread(thread_id: str, session: SessionContext = Depends(get_session)):
    """Retorna a thread com o historico completo."""
    try:
        return session.chat.get_thread(thread_id).to_dict()
    except StudyBuddyError as e:
        raise http_error(e) from e


@router.post("/threads/{thread_id}/messages")
async def send_message(
    thread_id: str,
    request: SendMessageRequest,
    session: SessionContext = Depends(get_session),
):
    """Envia mensagem ao tutor usando o documento ativo como contexto.

    - 404 se a thread nao existe
    - 409 se a thread ja aguarda uma resposta
    """
    try:
        thread = await session.chat.send(
            thread_id,
            request.message,
            document_text=session.documents.active_text,
        )
    except StudyBuddyError as e:
        raise http_error(e) from e

    return thread.to_dict()
