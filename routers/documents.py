"""Document endpoints - Selecao, upload e recomendacoes de video."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app_state import get_session, http_error
from core.exceptions import StudyBuddyError
from core.session import SessionContext

router = APIRouter(prefix="/documents", tags=["Documents"])
logger = logging.getLogger(__name__)


class UploadDocumentRequest(BaseModel):
    name: str
    text: str | None = None
    reference: str | None = None


class SelectDocumentRequest(BaseModel):
    document_id: str


@router.get("")
async def list_documents(session: SessionContext = Depends(get_session)):
    """Lista documentos disponiveis e o ativo."""
    library = session.documents
    return {
        "active_id": library.active.id,
        "documents": [d.summary() for d in library.list_documents()],
    }


@router.post("/upload", status_code=201)
async def upload_document(
    request: UploadDocumentRequest,
    session: SessionContext = Depends(get_session),
):
    """Envia um documento (substitui o upload anterior e o seleciona)."""
    document = session.documents.upload(request.name, text=request.text, reference=request.reference)
    return document.summary()


@router.get("/active")
async def get_active_document(session: SessionContext = Depends(get_session)):
    """Documento ativo com o texto extraido."""
    document = session.documents.active
    return {**document.summary(), "text": session.documents.active_text}


@router.put("/active")
async def select_document(
    request: SelectDocumentRequest,
    session: SessionContext = Depends(get_session),
):
    """Seleciona o documento ativo."""
    try:
        document = session.documents.select(request.document_id)
    except StudyBuddyError as e:
        raise http_error(e) from e
    return document.summary()


@router.get("/recommendations")
async def get_recommendations(session: SessionContext = Depends(get_session)):
    """Videos recomendados para o documento ativo (lista vazia se indisponivel)."""
    text = session.documents.active_text
    if not text:
        return {"videos": []}

    videos = await session.recommender.recommend(text)
    return {"videos": [v.model_dump() for v in videos]}
