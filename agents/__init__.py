"""Agents module - Chat com o tutor virtual e recomendacoes."""

from agents.chat_agent import (
    DEFAULT_THREAD_NAME,
    EMPTY_REPLY,
    FALLBACK_REPLY,
    ChatSessionManager,
    ChatThread,
    Message,
)
from agents.context_assembler import (
    RECENCY_PHRASES,
    TUTOR_SYSTEM_INSTRUCTION,
    AssembledRequest,
    ContextAssembler,
)
from agents.recommender import VideoRecommendation, VideoRecommender, extract_topic

__all__ = [
    # Chat
    "ChatSessionManager",
    "ChatThread",
    "Message",
    "DEFAULT_THREAD_NAME",
    "EMPTY_REPLY",
    "FALLBACK_REPLY",
    # Context
    "ContextAssembler",
    "AssembledRequest",
    "TUTOR_SYSTEM_INSTRUCTION",
    "RECENCY_PHRASES",
    # Recommender
    "VideoRecommender",
    "VideoRecommendation",
    "extract_topic",
]
