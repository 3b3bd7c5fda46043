"""
Study Buddy Server - Powered by Gemini

FastAPI server embedding the Study Buddy core:
- Quiz generation and scoring from the active document
- Virtual teacher chat with document context or web search
- Progress history persisted in AgentFS (live SSE stream)
- Study video recommendations
"""

import logging
from contextlib import asynccontextmanager
from typing import Awaitable, Callable

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import get_config
from core.session import SessionContext
from routers import chat_router, documents_router, progress_router, quiz_router

load_dotenv()

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Awaitable[SessionContext]]


def create_app(session_factory: SessionFactory | None = None) -> FastAPI:
    """Cria o app com o contexto de sessao aberto no lifespan.

    Args:
        session_factory: Coroutine que abre o SessionContext (padrao: ambiente)
    """
    session_factory = session_factory or SessionContext.open

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage app lifecycle."""
        config = get_config()
        logging.basicConfig(
            level=config.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        logger.info("Iniciando Study Buddy...")
        app.state.session = await session_factory()
        yield
        await app.state.session.close()
        logger.info("Study Buddy encerrado")

    app = FastAPI(
        title="Study Buddy",
        description="Revision assistant backend powered by Gemini",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:8001",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:8001",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(quiz_router)
    app.include_router(chat_router)
    app.include_router(progress_router)
    app.include_router(documents_router)

    @app.get("/health")
    async def health_check():
        """Detailed health check."""
        session = getattr(app.state, "session", None)
        return {
            "status": "healthy" if session is not None and not session.closed else "starting",
            "model": session.config.model if session else None,
            "user_id": session.user_id if session else None,
            "active_document": session.documents.active.id if session else None,
        }

    return app


app = create_app()


# =============================================================================
# MAIN
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8001)
