"""Quiz Prompts - Templates por tipo de pergunta."""

from .templates import KIND_LABELS, SYSTEM_PROMPTS, USER_QUERIES, build_quiz_prompt

__all__ = ["KIND_LABELS", "SYSTEM_PROMPTS", "USER_QUERIES", "build_quiz_prompt"]
