"""Progress endpoints - Historico, resumo e stream SSE."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from app_state import get_session, http_error
from core.exceptions import StudyBuddyError
from core.session import SessionContext
from progress import ProgressSummary, summarize

router = APIRouter(prefix="/progress", tags=["Progress"])
logger = logging.getLogger(__name__)


def _snapshot_event(snapshot) -> str:
    data = {"type": "snapshot", "attempts": [a.model_dump(mode="json") for a in snapshot]}
    return f"data: {json.dumps(data)}\n\n"


@router.get("")
async def get_progress(session: SessionContext = Depends(get_session)):
    """Historico de tentativas (mais recente primeiro) e registros pendentes."""
    try:
        attempts = await session.progress.history()
    except StudyBuddyError as e:
        raise http_error(e) from e

    return {
        "user_id": session.user_id,
        "attempts": [a.model_dump(mode="json") for a in attempts],
        "pending": [r.attempt.model_dump(mode="json") for r in session.progress.pending],
    }


@router.get("/summary", response_model=ProgressSummary)
async def get_summary(session: SessionContext = Depends(get_session)):
    """Agregados do painel."""
    try:
        return summarize(await session.progress.history())
    except StudyBuddyError as e:
        raise http_error(e) from e


@router.get("/stream")
async def stream_progress(session: SessionContext = Depends(get_session)):
    """Stream SSE de snapshots do historico.

    Um stream ativo por usuario: abrir outro encerra o anterior.
    """
    try:
        subscription = await session.progress.subscribe()
    except StudyBuddyError as e:
        raise http_error(e) from e

    async def generate_events():
        async with subscription:
            async for snapshot in subscription:
                yield _snapshot_event(snapshot)
        yield "data: [DONE]\n\n"

    return StreamingResponse(
        generate_events(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
