"""Quiz Engine - Geracao de conjuntos de perguntas e submissao."""

from __future__ import annotations

import logging
from typing import Any, Callable

from core.exceptions import (
    NotFoundError,
    OperationInProgressError,
    QuizSubmittedError,
    ReadinessFailure,
)
from llm import ContentPart, StructuredGenerationClient

from ..models.enums import QuestionKind
from ..models.schemas import Attempt, Question, QuestionSet, QuizPayload, ScoreReport
from ..models.state import QuizState
from ..prompts.templates import build_quiz_prompt
from .scoring_engine import QuizScoringEngine

logger = logging.getLogger(__name__)

AttemptSink = Callable[[Attempt], Any]


class QuizEngine:
    """Motor principal do quiz.

    Dono do QuestionSet atual e das respostas. Uma geracao por vez: uma
    segunda chamada a ``generate`` enquanto a primeira esta pendente e
    rejeitada sem tocar no cliente.

    Example:
        >>> engine = QuizEngine(client, attempt_sink=progress.record)
        >>> question_set = await engine.generate(text, QuestionKind.CHOICE)
        >>> engine.answer(question_set.questions[0].id, "Unification")
        >>> report = engine.submit()
    """

    MIN_DOCUMENT_CHARS = 50

    def __init__(
        self,
        client: StructuredGenerationClient,
        scoring: QuizScoringEngine | None = None,
        attempt_sink: AttemptSink | None = None,
        min_document_chars: int = MIN_DOCUMENT_CHARS,
    ):
        """Inicializa engine.

        Args:
            client: Cliente de geracao estruturada
            scoring: Motor de pontuacao (default: QuizScoringEngine)
            attempt_sink: Recebe a Attempt criada em cada submissao
            min_document_chars: Tamanho minimo do documento para gerar
        """
        self.client = client
        self.scoring = scoring or QuizScoringEngine()
        self.attempt_sink = attempt_sink
        self.min_document_chars = min_document_chars
        self.state = QuizState()

    @property
    def is_generating(self) -> bool:
        return self.state.generating

    # =========================================================================
    # GERACAO
    # =========================================================================

    async def generate(self, document_text: str, kind: QuestionKind | str) -> QuestionSet:
        """Gera um novo conjunto de perguntas a partir do documento.

        Args:
            document_text: Texto completo do documento ativo
            kind: Tipo de pergunta (choice, short, long)

        Returns:
            QuestionSet novo (substitui o anterior)

        Raises:
            ReadinessFailure: Documento curto demais (nenhuma chamada feita)
            OperationInProgressError: Ja existe geracao em andamento
            GenerationFailure: Tentativas esgotadas (estado anterior preservado)
        """
        kind = QuestionKind(kind)
        text = document_text or ""

        if len(text) < self.min_document_chars:
            raise ReadinessFailure(
                message="Document text is not ready for quiz generation",
                details={"length": len(text), "minimum": self.min_document_chars},
            )

        if self.state.generating:
            raise OperationInProgressError(
                message="Quiz generation already in progress",
                details={"target": "quiz"},
            )

        system_instruction, prompt = build_quiz_prompt(kind, text)

        self.state.generating = True
        try:
            logger.info(f"Gerando quiz ({kind.value}) a partir de {len(text)} caracteres")
            result = await self.client.request(
                [ContentPart(role="user", text=prompt)],
                system_instruction=system_instruction,
                output_schema=QuizPayload,
                validation_context={"kind": kind},
            )
        finally:
            self.state.generating = False

        if not result.ok:
            logger.error(f"Geracao de quiz falhou: {result.failure.message}")
            self.state.set_error(result.failure.message)
            raise result.failure

        question_set = self._build_question_set(result.value, kind)
        self.state.replace(question_set)
        logger.info(
            f"Quiz gerado: {question_set.id} com {len(question_set.questions)} perguntas"
        )
        return question_set

    def _build_question_set(self, payload: QuizPayload, kind: QuestionKind) -> QuestionSet:
        """Converte a resposta validada em modelos locais com IDs novos."""
        questions = []
        for generated in payload.questions:
            if kind == QuestionKind.CHOICE:
                canonical = generated.correct_answer or ""
            else:
                canonical = generated.model_answer or generated.correct_answer or ""

            questions.append(
                Question(
                    kind=kind,
                    prompt=generated.question,
                    options=list(generated.options) if kind == QuestionKind.CHOICE else [],
                    canonical_answer=canonical,
                    model_answer=generated.model_answer,
                    explanation=generated.explanation,
                )
            )

        return QuestionSet(title=payload.title, kind=kind, questions=questions)

    # =========================================================================
    # RESPOSTAS E SUBMISSAO
    # =========================================================================

    @property
    def current(self) -> QuestionSet | None:
        return self.state.question_set

    def answer(self, question_id: str, value: str) -> None:
        """Registra a resposta de uma pergunta.

        Raises:
            NotFoundError: Nenhum quiz ativo ou pergunta inexistente
            QuizSubmittedError: Quiz ja submetido
        """
        question_set = self.state.question_set
        if question_set is None:
            raise NotFoundError(message="No active quiz")

        if self.state.submitted:
            raise QuizSubmittedError(
                message="Quiz already submitted; generate a new quiz to answer again",
                details={"question_set_id": question_set.id},
            )

        if question_set.get_question(question_id) is None:
            raise NotFoundError(
                message=f"Question not found: {question_id}",
                details={"question_set_id": question_set.id},
            )

        self.state.set_answer(question_id, value)

    def submit(
        self,
        question_set: QuestionSet | None = None,
        answers: dict[str, str] | None = None,
    ) -> ScoreReport:
        """Pontua o quiz e emite a Attempt correspondente.

        Submissao e terminal por conjunto: respostas posteriores e nova
        submissao do mesmo conjunto sao rejeitadas ate um novo ``generate``.

        Args:
            question_set: Conjunto a pontuar (default: o atual)
            answers: Respostas adicionais, mescladas sobre as registradas

        Returns:
            ScoreReport com pontuacao e transcript
        """
        current = self.state.question_set
        question_set = question_set or current
        if question_set is None:
            raise NotFoundError(message="No active quiz")

        is_current = current is not None and question_set.id == current.id
        if self.state.is_submitted(question_set.id):
            raise QuizSubmittedError(
                message="Quiz already submitted",
                details={"question_set_id": question_set.id},
            )

        merged = dict(self.state.answers) if is_current else {}
        merged.update(answers or {})

        report = self.scoring.score(question_set, merged)

        if is_current:
            self.state.answers = merged
            self.state.mark_submitted(report)
        else:
            self.state.submitted_ids.add(question_set.id)

        attempt = Attempt(
            kind=question_set.kind,
            score=report.score,
            total=report.total,
            title=question_set.title,
        )
        logger.info(f"Quiz {question_set.id} submetido: {report.score}/{report.total}")

        if self.attempt_sink is not None:
            self.attempt_sink(attempt)

        return report

    def discard(self) -> None:
        """Descarta o quiz atual (mudanca de tela)."""
        if self.state.question_set is not None:
            logger.debug(f"Quiz descartado: {self.state.question_set.id}")
        self.state.clear()
