"""Progress Stats - Agregados do painel de revisao."""

from collections import Counter

from pydantic import BaseModel, Field

from quiz.models.schemas import Attempt


class ProgressSummary(BaseModel):
    """Resumo do historico de tentativas."""

    total_attempts: int = 0
    total_questions: int = 0
    total_correct: int = 0
    success_rate: float = Field(0.0, description="Percentual de acerto (0-100)")
    attempts_by_kind: dict[str, int] = Field(default={})
    most_practiced: str | None = Field(None, description="Tipo mais praticado")
    least_practiced: str | None = Field(None, description="Tipo menos praticado")


def summarize(attempts: list[Attempt]) -> ProgressSummary:
    """Calcula o resumo a partir do historico.

    Empates na contagem por tipo sao resolvidos pela primeira ocorrencia.
    """
    if not attempts:
        return ProgressSummary()

    total_questions = sum(a.total for a in attempts)
    total_correct = sum(a.score for a in attempts)
    success_rate = round(total_correct / total_questions * 100, 1) if total_questions else 0.0

    counts = Counter(a.kind.value for a in attempts)
    ranked = counts.most_common()

    return ProgressSummary(
        total_attempts=len(attempts),
        total_questions=total_questions,
        total_correct=total_correct,
        success_rate=success_rate,
        attempts_by_kind=dict(counts),
        most_practiced=ranked[0][0],
        least_practiced=min(ranked, key=lambda item: item[1])[0],
    )
