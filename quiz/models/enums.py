"""Quiz Enums - Tipos de pergunta."""

from enum import Enum


class QuestionKind(str, Enum):
    """Tipos de pergunta suportados."""

    CHOICE = "choice"  # Multipla escolha (3 perguntas x 4 alternativas)
    SHORT = "short"  # Resposta curta, 1-3 frases (3 perguntas)
    LONG = "long"  # Resposta longa, um paragrafo (2 perguntas)
