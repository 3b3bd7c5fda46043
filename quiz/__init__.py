"""Quiz Module - Geracao e correcao de quizzes a partir do documento ativo.

Arquitetura:
- models/: Enums, Schemas Pydantic, QuizState
- engine/: QuizEngine, QuizScoringEngine
- prompts/: Templates por tipo de pergunta
- router.py: FastAPI endpoints
"""

from .engine import QuizEngine, QuizScoringEngine
from .models import Attempt, Question, QuestionKind, QuestionSet, QuizState, ScoreReport

__all__ = [
    # Models
    "QuestionKind",
    "Question",
    "QuestionSet",
    "ScoreReport",
    "Attempt",
    "QuizState",
    # Engines
    "QuizEngine",
    "QuizScoringEngine",
]
