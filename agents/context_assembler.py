"""Context Assembler - Monta o payload de cada turno de chat."""

from dataclasses import dataclass, field

from llm import GOOGLE_SEARCH_TOOL, ContentPart

TUTOR_SYSTEM_INSTRUCTION = (
    "You are a helpful and supportive virtual teacher. Answer questions concisely and use "
    "the provided context from the coursebook whenever possible. If you use external search "
    "(only when context is not sufficient), you must cite sources clearly. When answering "
    "based on the provided [CONTEXT], you must cite the source in your response "
    "(e.g., 'According to the text, unification is...'). Do not make up facts."
)

# Frases que pedem informacao atual (busca externa mesmo com documento)
RECENCY_PHRASES = ("latest", "recent news")

CONTEXT_BLOCK_TEMPLATE = (
    "[CONTEXT FROM SELECTED PDF: The student is revising from this material: {excerpt}...]"
)


@dataclass
class AssembledRequest:
    """Payload pronto para o cliente de geracao."""

    contents: list[ContentPart]
    system_instruction: str
    use_external_tool: bool = False
    tools: list[str] = field(default_factory=list)


class ContextAssembler:
    """Constroi o request de chat a partir do documento e do historico.

    - Busca externa habilitada quando nao ha documento ou quando a mensagem
      contem uma frase de recencia (sem diferenciar maiusculas)
    - Documento cortado em ``char_limit`` caracteres e injetado como bloco
      entre colchetes antes da mensagem
    - Historico anterior preservado na ordem original

    Example:
        >>> assembler = ContextAssembler()
        >>> request = assembler.build(text, history, "What is unification?")
        >>> request.use_external_tool
        False
    """

    CHAR_LIMIT = 2500

    def __init__(self, char_limit: int = CHAR_LIMIT):
        self.char_limit = char_limit

    def needs_external_search(self, document_text: str, message: str) -> bool:
        if not document_text:
            return True
        lowered = message.lower()
        return any(phrase in lowered for phrase in RECENCY_PHRASES)

    def context_block(self, document_text: str) -> str:
        if not document_text:
            return ""
        return CONTEXT_BLOCK_TEMPLATE.format(excerpt=document_text[: self.char_limit])

    def build(
        self,
        document_text: str,
        history: list[ContentPart],
        current_message: str,
    ) -> AssembledRequest:
        """Monta o payload do turno atual.

        Args:
            document_text: Texto do documento ativo ("" = nenhum)
            history: Turnos anteriores (user/assistant), em ordem
            current_message: Mensagem do usuario neste turno

        Returns:
            AssembledRequest com contents, system instruction e ferramentas
        """
        document_text = document_text or ""
        use_external_tool = self.needs_external_search(document_text, current_message)

        full_message = f"{self.context_block(document_text)}\n\n{current_message}"
        contents = list(history) + [ContentPart(role="user", text=full_message)]

        return AssembledRequest(
            contents=contents,
            system_instruction=TUTOR_SYSTEM_INSTRUCTION,
            use_external_tool=use_external_tool,
            tools=[GOOGLE_SEARCH_TOOL] if use_external_tool else [],
        )
