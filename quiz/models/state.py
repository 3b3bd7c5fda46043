"""Quiz State - Gerenciamento de estado do quiz."""

from dataclasses import dataclass, field
from typing import Any

from .schemas import QuestionSet, ScoreReport


@dataclass
class QuizState:
    """Estado completo do quiz em andamento.

    Attributes:
        question_set: Conjunto de perguntas atual (None = nenhum gerado)
        answers: Respostas do usuario (question_id -> resposta)
        submitted: Se o conjunto atual ja foi submetido (terminal)
        report: Resultado da submissao
        generating: Se ha geracao em andamento
        error: Mensagem da ultima falha de geracao (se houver)
        submitted_ids: IDs de todos os conjuntos ja submetidos na sessao
    """

    question_set: QuestionSet | None = None
    answers: dict[str, str] = field(default_factory=dict)
    submitted: bool = False
    report: ScoreReport | None = None
    generating: bool = False
    error: str | None = None
    submitted_ids: set[str] = field(default_factory=set)

    def replace(self, question_set: QuestionSet) -> None:
        """Substitui o conjunto inteiro e reinicia respostas e submissao."""
        self.question_set = question_set
        self.answers = {}
        self.submitted = False
        self.report = None
        self.error = None

    def set_answer(self, question_id: str, value: str) -> None:
        self.answers[question_id] = value

    def is_submitted(self, question_set_id: str) -> bool:
        return question_set_id in self.submitted_ids

    def mark_submitted(self, report: ScoreReport) -> None:
        """Marca o quiz atual como submetido."""
        self.submitted = True
        self.report = report
        self.submitted_ids.add(report.question_set_id)

    def set_error(self, error: str) -> None:
        """Define mensagem de erro."""
        self.error = error

    def clear(self) -> None:
        # submitted_ids sobrevive: conjuntos descartados continuam terminais
        self.question_set = None
        self.answers = {}
        self.submitted = False
        self.report = None
        self.error = None

    def to_dict(self, exclude: dict[str, Any] | None = None) -> dict[str, Any]:
        """Converte para dicionario (para resposta da API).

        Args:
            exclude: Campos omitidos do question_set (ex: respostas de referencia)
        """
        question_set = (
            self.question_set.model_dump(mode="json", exclude=exclude)
            if self.question_set
            else None
        )
        return {
            "question_set": question_set,
            "answers": dict(self.answers),
            "submitted": self.submitted,
            "report": self.report.model_dump(mode="json") if self.report else None,
            "generating": self.generating,
            "error": self.error,
        }
