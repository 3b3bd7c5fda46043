"""Document Library - Documento de exemplo e upload unico do usuario."""

from __future__ import annotations

import asyncio
import logging
import uuid
from enum import Enum
from typing import Protocol

from pydantic import BaseModel, Field

from core.exceptions import NotFoundError

logger = logging.getLogger(__name__)

BUILTIN_DOCUMENT_ID = "mock-ncert-1"
BUILTIN_DOCUMENT_NAME = "NCERT Physics XI - Ch 1 (Mock)"

BUILTIN_DOCUMENT_TEXT = """
Chapter 1: Physical World

1.1 What is Physics?
Physics is a basic science in the category of 'natural sciences' like Chemistry and Biology. The word 'Physics' comes from a Greek word meaning 'nature'. Physics is the study of the basic laws of nature and their manifestation in different natural phenomena. The scope of Physics is vast. It covers microscopic (atoms, nuclei) and macroscopic (terrestrial, astronomical) phenomena.

1.2 Scope and Excitement of Physics
Physics is concerned with two principal thrusts: unification and reduction. Unification is the attempt to explain diverse physical phenomena in terms of a few concepts and laws. For example, the same law of gravitation applies to a falling apple and to the motion of the moon around the earth. Reductionism is the idea of deducing the properties of a bigger, more complex system from the properties and interactions of its constituent simpler parts.

1.3 Physics, Technology and Society
The application of physics principles leads to great technological advancements. For example, the law of electromagnetism is used in radio and TV communication. Nuclear fission is used for power generation. The laser is a device based on the principle of stimulated emission of radiation. The development of steam engine led to the industrial revolution. All these advancements show the deep connection between physics, technology, and society.
"""


class DocumentOrigin(str, Enum):
    BUILTIN = "builtin"
    UPLOADED = "uploaded"


class ExtractionStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class Document(BaseModel):
    """Documento de estudo disponivel na sessao."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str
    origin: DocumentOrigin
    text: str = Field(default="", description="Texto extraido")
    status: ExtractionStatus = ExtractionStatus.READY
    error: str | None = None

    def summary(self) -> dict:
        """Dados para listagem (sem o texto completo)."""
        return {
            "id": self.id,
            "name": self.name,
            "origin": self.origin.value,
            "status": self.status.value,
            "chars": len(self.text),
            "error": self.error,
        }


class TextExtractor(Protocol):
    """Colaborador externo que extrai texto de um arquivo enviado."""

    async def extract(self, reference: str) -> str: ...


class DocumentLibrary:
    """Documentos da sessao: o exemplo embutido mais um upload por vez.

    Enviar um novo arquivo descarta o upload anterior. Sem texto pronto,
    o ``TextExtractor`` roda em background e o documento fica ``loading``;
    um resultado que chega para um documento ja substituido e descartado.

    Example:
        >>> library = DocumentLibrary(extractor)
        >>> doc = library.upload("notes.pdf", reference="/tmp/notes.pdf")
        >>> await library.wait()
        >>> library.active_text
    """

    def __init__(self, extractor: TextExtractor | None = None):
        self.extractor = extractor
        self._builtin = Document(
            id=BUILTIN_DOCUMENT_ID,
            name=BUILTIN_DOCUMENT_NAME,
            origin=DocumentOrigin.BUILTIN,
            text=BUILTIN_DOCUMENT_TEXT,
        )
        self._uploaded: Document | None = None
        self._active_id = self._builtin.id
        self._extraction: asyncio.Task | None = None

    def list_documents(self) -> list[Document]:
        documents = [self._builtin]
        if self._uploaded is not None:
            documents.append(self._uploaded)
        return documents

    def get(self, document_id: str) -> Document:
        for document in self.list_documents():
            if document.id == document_id:
                return document
        raise NotFoundError(message=f"Document not found: {document_id}")

    def upload(self, name: str, text: str | None = None, reference: str | None = None) -> Document:
        """Substitui o upload atual e o seleciona.

        Args:
            name: Nome exibido
            text: Texto ja extraido (documento fica pronto na hora)
            reference: Referencia repassada ao extrator quando nao ha texto

        Returns:
            O novo documento (possivelmente em ``loading``)
        """
        document = Document(name=name, origin=DocumentOrigin.UPLOADED)

        if self._uploaded is not None:
            logger.info(f"Upload anterior descartado: {self._uploaded.name}")

        self._uploaded = document
        self._active_id = document.id

        if text is not None:
            document.text = text
            document.status = ExtractionStatus.READY
        elif self.extractor is None or reference is None:
            document.status = ExtractionStatus.FAILED
            document.error = "No text extractor available for this upload"
            logger.warning(f"Upload sem texto nem extrator: {name}")
        else:
            document.status = ExtractionStatus.LOADING
            self._extraction = asyncio.get_running_loop().create_task(
                self._extract(document, reference)
            )

        logger.info(f"Documento enviado: {name} ({document.status.value})")
        return document

    async def _extract(self, document: Document, reference: str) -> None:
        try:
            text = await self.extractor.extract(reference)
        except Exception as e:
            if self._uploaded is document:
                document.status = ExtractionStatus.FAILED
                document.error = str(e)
                logger.error(f"Extracao falhou para {document.name}: {e}")
            return

        if self._uploaded is not document:
            logger.debug(f"Extracao obsoleta descartada: {document.name}")
            return

        document.text = text or ""
        document.status = ExtractionStatus.READY
        logger.info(f"Extracao concluida: {document.name} ({len(document.text)} caracteres)")

    async def wait(self) -> None:
        """Aguarda a extracao em andamento (se houver)."""
        if self._extraction is not None:
            await asyncio.gather(self._extraction, return_exceptions=True)

    def select(self, document_id: str) -> Document:
        document = self.get(document_id)
        self._active_id = document.id
        return document

    @property
    def active(self) -> Document:
        return self.get(self._active_id)

    @property
    def active_text(self) -> str:
        """Texto do documento ativo ("" enquanto nao estiver pronto)."""
        document = self.active
        if document.status != ExtractionStatus.READY:
            return ""
        return document.text
