"""Quiz Scoring Engine - Motor de pontuacao e feedback."""

from ..models.enums import QuestionKind
from ..models.schemas import Question, QuestionFeedback, QuestionSet, ScoreReport
from ..prompts.templates import KIND_LABELS


class QuizScoringEngine:
    """Motor de pontuacao para os tres tipos de pergunta.

    Regras:
        - choice: igualdade exata (sensivel a maiusculas) com a resposta canonica
        - short/long: aceita se a resposta, sem espacos nas pontas, tiver mais
          de ``MIN_FREE_TEXT_CHARS`` caracteres. Heuristica de esforco, nao
          avaliacao semantica.
        - pergunta sem resposta: sempre incorreta

    Example:
        >>> engine = QuizScoringEngine()
        >>> report = engine.score(question_set, {"q1": "Unification"})
        >>> print(f"{report.score}/{report.total}")
    """

    MIN_FREE_TEXT_CHARS = 5
    DISPLAY_LIMIT = 50
    NO_ANSWER = "No Answer"

    def is_correct(self, question: Question, answer: str | None) -> bool:
        """Avalia uma resposta individual."""
        if answer is None:
            return False

        if question.kind == QuestionKind.CHOICE:
            return answer == question.canonical_answer

        # Esforco minimo, nao correcao: espacos nas pontas nao contam
        return len(answer.strip()) > self.MIN_FREE_TEXT_CHARS

    def truncate(self, text: str) -> str:
        if len(text) <= self.DISPLAY_LIMIT:
            return text
        return text[: self.DISPLAY_LIMIT] + "..."

    def score(self, question_set: QuestionSet, answers: dict[str, str]) -> ScoreReport:
        """Calcula pontuacao e monta o feedback da submissao.

        Args:
            question_set: Conjunto avaliado
            answers: Respostas por question_id (ausente = sem resposta)

        Returns:
            ScoreReport com pontuacao, feedback por pergunta e transcript
        """
        feedback: list[QuestionFeedback] = []
        correct = 0

        for question in question_set.questions:
            answer = answers.get(question.id)
            if answer is not None and not answer.strip():
                answer = None

            is_correct = self.is_correct(question, answer)
            if is_correct:
                correct += 1

            expected = (
                question.canonical_answer
                if question.kind == QuestionKind.CHOICE
                else question.model_answer
            )
            feedback.append(
                QuestionFeedback(
                    question_id=question.id,
                    prompt=question.prompt,
                    user_answer=answer,
                    expected_answer=expected,
                    is_correct=is_correct,
                    explanation=question.explanation,
                )
            )

        total = len(question_set.questions)
        percentage = round(correct / total * 100, 1) if total else 0.0

        return ScoreReport(
            question_set_id=question_set.id,
            title=question_set.title,
            kind=question_set.kind,
            score=correct,
            total=total,
            percentage=percentage,
            feedback=feedback,
            transcript=self.build_transcript(question_set, feedback),
        )

    def build_transcript(
        self, question_set: QuestionSet, feedback: list[QuestionFeedback]
    ) -> str:
        """Texto de feedback exibido apos a submissao."""
        label = KIND_LABELS.get(question_set.kind, question_set.kind.value.upper())
        lines = [f"Quiz: {question_set.title} ({label})", ""]

        for index, item in enumerate(feedback, start=1):
            lines.append(f"{index}. {item.prompt}")

            if question_set.kind == QuestionKind.CHOICE:
                lines.append(f"   Your Choice: {item.user_answer or self.NO_ANSWER}")
                lines.append(f"   Correct Choice: {item.expected_answer}")
            else:
                user = self.truncate(item.user_answer) if item.user_answer else self.NO_ANSWER
                model = self.truncate(item.expected_answer) if item.expected_answer else "N/A"
                lines.append(f"   Your Answer: {user}")
                lines.append(f"   Model Answer: {model}")

            lines.append(f"   Status: {'CORRECT' if item.is_correct else 'INCORRECT'}")
            lines.append(f"   Explanation: {item.explanation}")
            lines.append("")

        return "\n".join(lines)
