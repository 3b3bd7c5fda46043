# =============================================================================
# CONFTEST - Fixtures compartilhadas para todos os testes
# =============================================================================
# Centraliza mocks, transporte falso e payloads de exemplo
# =============================================================================

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest


# =============================================================================
# TRANSPORTE FALSO
# =============================================================================


class FakeTransport:
    """Transporte de geracao com respostas roteirizadas.

    Cada item do roteiro pode ser texto, GenerationResponse ou uma excecao
    (levantada na chamada). Quando o roteiro acaba, repete o ultimo item.
    Com ``gate`` definido, cada chamada aguarda o evento antes de responder.
    """

    def __init__(self, script=None):
        self.script = list(script or [])
        self.requests = []
        self.gate: asyncio.Event | None = None
        self.started = asyncio.Event()

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def generate(self, request):
        from llm import GenerationResponse

        self.requests.append(request)
        self.started.set()

        if self.gate is not None:
            await self.gate.wait()

        index = min(len(self.requests), len(self.script)) - 1
        item = self.script[index] if self.script else ""

        if isinstance(item, BaseException):
            raise item
        if isinstance(item, GenerationResponse):
            return item
        return GenerationResponse(text=item)


@pytest.fixture
def make_transport():
    """Factory de FakeTransport."""

    def _make(*script):
        return FakeTransport(script)

    return _make


@pytest.fixture
def transport_failure():
    """Falha de transporte reutilizavel."""
    from core.exceptions import TransportFailure

    return TransportFailure(message="HTTP error! status: 503", details={"status": 503})


@pytest.fixture
def make_client():
    """Factory de StructuredGenerationClient sem espera real no backoff."""
    from llm import StructuredGenerationClient

    def _make(transport, max_attempts=3):
        return StructuredGenerationClient(
            transport,
            max_attempts=max_attempts,
            backoff_base=1.0,
            sleep=AsyncMock(),
        )

    return _make


# =============================================================================
# FIXTURES DO AGENTFS
# =============================================================================


@pytest.fixture
def mock_agentfs():
    """Mock do AgentFS com KV em memoria."""
    mock = MagicMock()
    _storage = {}

    async def mock_get(key):
        return _storage.get(key)

    async def mock_set(key, value):
        _storage[key] = value

    async def mock_delete(key):
        _storage.pop(key, None)

    async def mock_list(prefix=""):
        return [{"key": k} for k in _storage if k.startswith(prefix or "")]

    mock.kv = AsyncMock()
    mock.kv.get = mock_get
    mock.kv.set = mock_set
    mock.kv.delete = mock_delete
    mock.kv.list = mock_list
    mock._storage = _storage

    mock.close = AsyncMock()

    return mock


@pytest.fixture
def failing_agentfs():
    """Mock do AgentFS que rejeita escritas."""
    mock = MagicMock()
    mock.kv = AsyncMock()
    mock.kv.get = AsyncMock(return_value=None)
    mock.kv.set = AsyncMock(side_effect=RuntimeError("permission denied"))
    mock.kv.list = AsyncMock(return_value=[])
    mock.close = AsyncMock()
    return mock


# =============================================================================
# PAYLOADS DO MODELO
# =============================================================================


@pytest.fixture
def choice_payload():
    """Quiz de multipla escolha valido (3 perguntas x 4 alternativas)."""
    return {
        "title": "Physical World",
        "questions": [
            {
                "id": "q1",
                "kind": "choice",
                "question": "What are the two principal thrusts of physics?",
                "options": [
                    "Unification and reduction",
                    "Observation and theory",
                    "Energy and matter",
                    "Space and time",
                ],
                "correct_answer": "Unification and reduction",
                "explanation": "Section 1.2 names unification and reduction.",
            },
            {
                "id": "q2",
                "kind": "choice",
                "question": "Which device is based on stimulated emission of radiation?",
                "options": ["Radio", "Laser", "Steam engine", "Reactor"],
                "correct_answer": "Laser",
                "explanation": "The laser is based on stimulated emission.",
            },
            {
                "id": "q3",
                "kind": "choice",
                "question": "The word 'Physics' comes from a Greek word meaning?",
                "options": ["Nature", "Motion", "Force", "Matter"],
                "correct_answer": "Nature",
                "explanation": "Physics comes from a Greek word meaning nature.",
            },
        ],
    }


@pytest.fixture
def short_payload():
    """Quiz de respostas curtas valido (3 perguntas)."""
    return {
        "title": "Physical World - Short Answers",
        "questions": [
            {
                "kind": "short",
                "question": f"Short question {i}?",
                "model_answer": f"Model answer number {i} explaining the concept.",
                "explanation": f"Explanation {i}.",
            }
            for i in range(1, 4)
        ],
    }


@pytest.fixture
def long_payload():
    """Quiz de respostas longas valido (2 perguntas)."""
    return {
        "title": "Physical World - Long Answers",
        "questions": [
            {
                "kind": "long",
                "question": f"Discuss topic {i} in detail.",
                "model_answer": "A paragraph-long model answer. " * 4,
                "explanation": f"Explanation {i}.",
            }
            for i in range(1, 3)
        ],
    }


@pytest.fixture
def as_json():
    """Serializa payload como a resposta textual do modelo."""

    def _as_json(payload):
        return json.dumps(payload)

    return _as_json


# =============================================================================
# FIXTURES DO QUIZ
# =============================================================================


@pytest.fixture
def sample_question_set():
    """QuestionSet de multipla escolha com respostas canonicas A, B, C."""
    from quiz.models.enums import QuestionKind
    from quiz.models.schemas import Question, QuestionSet

    questions = [
        Question(
            id=f"q{i}",
            kind=QuestionKind.CHOICE,
            prompt=f"Question {i}?",
            options=["A", "B", "C", "D"],
            canonical_answer=answer,
            explanation=f"Because {answer}.",
        )
        for i, answer in enumerate(["A", "B", "C"], start=1)
    ]
    return QuestionSet(title="Sample Quiz", kind=QuestionKind.CHOICE, questions=questions)


@pytest.fixture
def make_attempt():
    """Factory de Attempt."""
    from quiz.models.enums import QuestionKind
    from quiz.models.schemas import Attempt

    def _make(score=1, total=3, timestamp=1_700_000_000_000, kind=QuestionKind.CHOICE, **kwargs):
        return Attempt(score=score, total=total, timestamp=timestamp, kind=kind, **kwargs)

    return _make
