"""Quiz Templates - Prompts e constantes para geracao de questoes."""

from ..models.enums import QuestionKind

# =============================================================================
# SYSTEM PROMPTS (um por tipo)
# =============================================================================

CHOICE_SYSTEM_PROMPT = (
    "You are an expert educational content generator. Based on the provided text, "
    "generate exactly 3 highly relevant and challenging Multiple Choice Questions (MCQs). "
    "Each question must have exactly 4 options and one correct answer. "
    "Respond ONLY with the JSON structure provided."
)

SHORT_SYSTEM_PROMPT = (
    "You are an expert educational content generator. Based on the provided text, "
    "generate exactly 3 challenging Short Answer Questions (SAQs). "
    "Each question should require a 1-3 sentence answer. "
    "Respond ONLY with the JSON structure provided."
)

LONG_SYSTEM_PROMPT = (
    "You are an expert educational content generator. Based on the provided text, "
    "generate exactly 2 challenging Long Answer Questions (LAQs). "
    "Each question should require a paragraph-long answer. "
    "Respond ONLY with the JSON structure provided."
)

# =============================================================================
# USER QUERIES
# =============================================================================

CHOICE_USER_QUERY = (
    "Generate a set of 3 MCQs (Multiple Choice Questions) based on the following course "
    "material text. Provide a brief, concise explanation for each correct answer."
)

SHORT_USER_QUERY = (
    "Generate a set of 3 SAQs (Short Answer Questions) based on the following course "
    "material text. Provide a model answer and a brief explanation for context."
)

LONG_USER_QUERY = (
    "Generate a set of 2 LAQs (Long Answer Questions) based on the following course "
    "material text. Provide a model answer and a brief explanation for context."
)

QUIZ_PROMPT_TEMPLATE = """{user_query}

Course Material:
---
{text}"""

# =============================================================================
# MAPEAMENTO POR TIPO
# =============================================================================

SYSTEM_PROMPTS: dict[QuestionKind, str] = {
    QuestionKind.CHOICE: CHOICE_SYSTEM_PROMPT,
    QuestionKind.SHORT: SHORT_SYSTEM_PROMPT,
    QuestionKind.LONG: LONG_SYSTEM_PROMPT,
}

USER_QUERIES: dict[QuestionKind, str] = {
    QuestionKind.CHOICE: CHOICE_USER_QUERY,
    QuestionKind.SHORT: SHORT_USER_QUERY,
    QuestionKind.LONG: LONG_USER_QUERY,
}

# Rotulo curto usado no cabecalho do feedback
KIND_LABELS: dict[QuestionKind, str] = {
    QuestionKind.CHOICE: "MCQ",
    QuestionKind.SHORT: "SAQ",
    QuestionKind.LONG: "LAQ",
}


def build_quiz_prompt(kind: QuestionKind, text: str) -> tuple[str, str]:
    """Retorna (system_instruction, user_prompt) para o tipo pedido."""
    kind = QuestionKind(kind)
    prompt = QUIZ_PROMPT_TEMPLATE.format(user_query=USER_QUERIES[kind], text=text)
    return SYSTEM_PROMPTS[kind], prompt
