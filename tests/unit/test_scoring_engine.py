# =============================================================================
# TESTES - Scoring Engine
# =============================================================================
# Testes unitarios para pontuacao e transcript de feedback
# =============================================================================


def _free_text_set(kind="short", model_answer="Unification explains phenomena with few laws."):
    from quiz.models.schemas import Question, QuestionSet

    question = Question(
        id="s1",
        kind=kind,
        prompt="What is unification?",
        canonical_answer=model_answer,
        model_answer=model_answer,
        explanation="See section 1.2.",
    )
    return QuestionSet(title="Short Quiz", kind=kind, questions=[question])


class TestChoiceScoring:
    """Testes para multipla escolha."""

    def test_partial_score(self, sample_question_set):
        """Canonicas [A,B,C], respostas {q1:A, q2:errada, q3:sem resposta} -> 1/3."""
        from quiz.engine.scoring_engine import QuizScoringEngine

        report = QuizScoringEngine().score(sample_question_set, {"q1": "A", "q2": "D"})

        assert report.score == 1
        assert report.total == 3
        assert [f.is_correct for f in report.feedback] == [True, False, False]
        assert report.feedback[2].user_answer is None

    def test_case_sensitive(self, sample_question_set):
        """Comparacao exata, sensivel a maiusculas."""
        from quiz.engine.scoring_engine import QuizScoringEngine

        report = QuizScoringEngine().score(sample_question_set, {"q1": "a"})

        assert report.score == 0

    def test_deterministic(self, sample_question_set):
        """Mesmas entradas, mesmo resultado."""
        from quiz.engine.scoring_engine import QuizScoringEngine

        engine = QuizScoringEngine()
        answers = {"q1": "A", "q2": "B", "q3": "D"}

        first = engine.score(sample_question_set, answers)
        second = engine.score(sample_question_set, answers)

        assert first.model_dump() == second.model_dump()
        assert first.percentage == 66.7


class TestFreeTextScoring:
    """Testes para respostas curtas e longas."""

    def test_substantial_answer_correct(self):
        """'It is unification.' e aceita."""
        from quiz.engine.scoring_engine import QuizScoringEngine

        report = QuizScoringEngine().score(_free_text_set(), {"s1": "It is unification."})

        assert report.score == 1

    def test_short_answer_incorrect(self):
        """Resposta com ate 5 caracteres (sem espacos nas pontas) e rejeitada."""
        from quiz.engine.scoring_engine import QuizScoringEngine

        engine = QuizScoringEngine()

        assert engine.score(_free_text_set(), {"s1": "   laws   "}).score == 0
        assert engine.score(_free_text_set(), {"s1": "sixchr"}).score == 1

    def test_blank_answer_counts_as_unanswered(self):
        """Espacos em branco equivalem a sem resposta."""
        from quiz.engine.scoring_engine import QuizScoringEngine

        report = QuizScoringEngine().score(_free_text_set("long"), {"s1": "     "})

        assert report.score == 0
        assert report.feedback[0].user_answer is None


class TestTranscript:
    """Testes para o texto de feedback."""

    def test_choice_transcript(self, sample_question_set):
        """Formato para multipla escolha."""
        from quiz.engine.scoring_engine import QuizScoringEngine

        report = QuizScoringEngine().score(sample_question_set, {"q1": "A"})

        assert report.transcript.startswith("Quiz: Sample Quiz (MCQ)\n\n1. Question 1?\n")
        assert "   Your Choice: A\n   Correct Choice: A\n   Status: CORRECT" in report.transcript
        assert "   Your Choice: No Answer\n   Correct Choice: B\n   Status: INCORRECT" in (
            report.transcript
        )
        assert "   Explanation: Because C." in report.transcript

    def test_free_text_truncated_to_50(self):
        """Respostas livres longas sao cortadas em 50 caracteres."""
        from quiz.engine.scoring_engine import QuizScoringEngine

        answer = "A" * 80
        report = QuizScoringEngine().score(_free_text_set(), {"s1": answer})

        assert f"   Your Answer: {'A' * 50}...\n" in report.transcript
        assert "(SAQ)" in report.transcript

    def test_short_free_text_not_marked_truncated(self):
        """Sem reticencias quando nao houve corte."""
        from quiz.engine.scoring_engine import QuizScoringEngine

        report = QuizScoringEngine().score(_free_text_set(), {"s1": "It is unification."})

        assert "   Your Answer: It is unification.\n" in report.transcript

    def test_missing_model_answer(self):
        """Sem resposta modelo, mostra N/A."""
        from quiz.engine.scoring_engine import QuizScoringEngine

        report = QuizScoringEngine().score(_free_text_set(model_answer=""), {})

        assert "   Model Answer: N/A" in report.transcript
