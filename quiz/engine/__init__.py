"""Quiz Engines - Logica de negocios."""

from .quiz_engine import QuizEngine
from .scoring_engine import QuizScoringEngine

__all__ = ["QuizScoringEngine", "QuizEngine"]
