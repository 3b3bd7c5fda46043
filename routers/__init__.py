"""Routers module for Study Buddy."""

from quiz.router import router as quiz_router

from .chat import router as chat_router
from .documents import router as documents_router
from .progress import router as progress_router

__all__ = [
    "chat_router",
    "documents_router",
    "progress_router",
    "quiz_router",
]
