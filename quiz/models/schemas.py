"""Quiz Schemas - Modelos Pydantic para geracao, pontuacao e API."""

import time
import uuid

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, model_validator

from .enums import QuestionKind

# Cardinalidade fixa por tipo (nao inferida da resposta)
QUESTION_COUNTS = {
    QuestionKind.CHOICE: 3,
    QuestionKind.SHORT: 3,
    QuestionKind.LONG: 2,
}
CHOICE_OPTION_COUNT = 4


def new_id() -> str:
    return uuid.uuid4().hex


def now_ms() -> int:
    return int(time.time() * 1000)


# =============================================================================
# FORMATO DE SAIDA DO MODELO
# =============================================================================


class GeneratedQuestion(BaseModel):
    """Pergunta como retornada pelo modelo (nao confiavel)."""

    id: str | None = Field(default=None, description="ID sugerido pelo modelo (ignorado)")
    kind: QuestionKind | None = Field(default=None, description="choice, short ou long")
    question: str = Field(..., min_length=1, description="Enunciado da pergunta")
    options: list[str] = Field(default=[], description="Alternativas (apenas choice)")
    correct_answer: str | None = Field(default=None, description="Alternativa correta (choice)")
    model_answer: str | None = Field(default=None, description="Resposta modelo (short/long)")
    explanation: str = Field(..., description="Explicacao breve da resposta")


class QuizPayload(BaseModel):
    """Quiz completo retornado pelo modelo.

    Com ``context={"kind": ...}`` na validacao, exige a cardinalidade do
    tipo e a consistencia das alternativas. Formatos inesperados viram
    SchemaViolation no decoder (e portanto nova tentativa).
    """

    title: str = Field(..., min_length=1, description="Titulo do quiz")
    questions: list[GeneratedQuestion] = Field(..., description="Perguntas geradas")

    @model_validator(mode="after")
    def check_shape_for_kind(self, info: ValidationInfo) -> "QuizPayload":
        kind = (info.context or {}).get("kind")
        if kind is None:
            return self

        kind = QuestionKind(kind)
        expected = QUESTION_COUNTS[kind]
        if len(self.questions) != expected:
            raise ValueError(
                f"{kind.value} quiz requires exactly {expected} questions, got {len(self.questions)}"
            )

        if kind == QuestionKind.CHOICE:
            for index, q in enumerate(self.questions, start=1):
                if len(q.options) != CHOICE_OPTION_COUNT:
                    raise ValueError(
                        f"question {index} requires {CHOICE_OPTION_COUNT} options, got {len(q.options)}"
                    )
                if len(set(q.options)) != len(q.options):
                    raise ValueError(f"question {index} has duplicate options")
                if q.correct_answer not in q.options:
                    raise ValueError(f"question {index} correct answer is not one of its options")

        return self


# =============================================================================
# MODELOS LOCAIS
# =============================================================================


class Question(BaseModel):
    """Pergunta validada com ID local."""

    id: str = Field(default_factory=new_id, description="ID gerado localmente")
    kind: QuestionKind
    prompt: str = Field(..., description="Enunciado")
    options: list[str] = Field(default=[], description="Alternativas (apenas choice)")
    canonical_answer: str = Field(default="", description="Resposta de referencia")
    model_answer: str | None = Field(default=None, description="Resposta modelo (short/long)")
    explanation: str = Field(default="", description="Explicacao da resposta")

    @model_validator(mode="after")
    def check_choice_options(self) -> "Question":
        if self.kind == QuestionKind.CHOICE:
            if len(set(self.options)) < 2:
                raise ValueError("choice question requires at least 2 distinct options")
            if self.canonical_answer not in self.options:
                raise ValueError("canonical answer must be one of the options")
        return self


class QuestionSet(BaseModel):
    """Conjunto de perguntas gerado de uma vez (substituido por inteiro)."""

    id: str = Field(default_factory=new_id)
    title: str
    kind: QuestionKind
    questions: list[Question] = Field(..., min_length=1)
    created_at: int = Field(default_factory=now_ms)

    def get_question(self, question_id: str) -> Question | None:
        return next((q for q in self.questions if q.id == question_id), None)


class QuestionFeedback(BaseModel):
    """Avaliacao de uma pergunta na submissao."""

    question_id: str
    prompt: str
    user_answer: str | None = Field(None, description="Resposta do usuario (None = sem resposta)")
    expected_answer: str | None = Field(None, description="Resposta correta ou modelo")
    is_correct: bool
    explanation: str = ""


class ScoreReport(BaseModel):
    """Resultado da submissao."""

    question_set_id: str
    title: str
    kind: QuestionKind
    score: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    percentage: float
    feedback: list[QuestionFeedback]
    transcript: str = Field(..., description="Texto de feedback para exibicao")


class Attempt(BaseModel):
    """Tentativa concluida - imutavel, apenas acrescentada ao store."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    kind: QuestionKind
    score: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    timestamp: int = Field(default_factory=now_ms, description="Epoch em milissegundos")
    title: str = ""

    @model_validator(mode="after")
    def check_score_bounds(self) -> "Attempt":
        if self.score > self.total:
            raise ValueError(f"score ({self.score}) cannot exceed total ({self.total})")
        return self


# =============================================================================
# REQUEST / RESPONSE DA API
# =============================================================================


class GenerateQuizRequest(BaseModel):
    """Request para geracao de quiz."""

    kind: QuestionKind = Field(default=QuestionKind.CHOICE, description="Tipo de pergunta")


class AnswerRequest(BaseModel):
    """Request para registrar resposta de uma pergunta."""

    question_id: str
    answer: str


class SubmitQuizRequest(BaseModel):
    """Request de submissao (respostas adicionais sao mescladas)."""

    answers: dict[str, str] = Field(default={}, description="question_id -> resposta")
