"""Quiz Models - Enums, Schemas e State."""

from .enums import QuestionKind
from .schemas import (
    CHOICE_OPTION_COUNT,
    QUESTION_COUNTS,
    AnswerRequest,
    Attempt,
    GeneratedQuestion,
    GenerateQuizRequest,
    Question,
    QuestionFeedback,
    QuestionSet,
    QuizPayload,
    ScoreReport,
    SubmitQuizRequest,
)
from .state import QuizState

__all__ = [
    # Enums
    "QuestionKind",
    # Schemas
    "QUESTION_COUNTS",
    "CHOICE_OPTION_COUNT",
    "GeneratedQuestion",
    "QuizPayload",
    "Question",
    "QuestionSet",
    "QuestionFeedback",
    "ScoreReport",
    "Attempt",
    "GenerateQuizRequest",
    "AnswerRequest",
    "SubmitQuizRequest",
    # State
    "QuizState",
]
