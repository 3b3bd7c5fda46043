"""Attempt Store - Abstracao sobre AgentFS para o historico de tentativas."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from pydantic import ValidationError

from core.exceptions import PersistFailure
from quiz.models.schemas import Attempt

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[list[Attempt]], Any]


class AttemptStore:
    """Colecao de tentativas por usuario no KV store do AgentFS.

    Estrutura de chaves:
        - progress:{app_id}:users:{user_id}:attempts:{attempt_id} -> Attempt

    Escrita = criacao com o ID ja gerado da tentativa (nunca sobrescreve).
    Leitura = consulta "ao vivo": ``watch`` entrega um snapshot inicial e
    um novo snapshot a cada escrita na colecao do usuario.

    Example:
        >>> store = AttemptStore(agentfs, app_id="study-buddy-app")
        >>> unsubscribe = await store.watch("user-1", print)
        >>> await store.create("user-1", attempt)
        >>> unsubscribe()
    """

    KEY_PREFIX = "progress"

    def __init__(self, agentfs: AgentFS, app_id: str = "study-buddy-app"):
        """Inicializa store com instancia do AgentFS.

        Args:
            agentfs: Instancia configurada do AgentFS
            app_id: Namespace da aplicacao
        """
        self.agentfs = agentfs
        self.app_id = app_id
        self._listeners: dict[str, list[SnapshotListener]] = {}

    def _collection_prefix(self, user_id: str) -> str:
        """Prefixo da colecao de tentativas do usuario."""
        return f"{self.KEY_PREFIX}:{self.app_id}:users:{user_id}:attempts:"

    def _attempt_key(self, user_id: str, attempt_id: str) -> str:
        return f"{self._collection_prefix(user_id)}{attempt_id}"

    async def create(self, user_id: str, attempt: Attempt) -> None:
        """Cria o documento da tentativa e notifica os observadores.

        Raises:
            PersistFailure: Escrita rejeitada ou ID ja existente
        """
        key = self._attempt_key(user_id, attempt.id)

        try:
            existing = await self.agentfs.kv.get(key)
        except Exception as e:
            raise PersistFailure(
                message=f"Falha ao verificar tentativa {attempt.id}: {e}",
                details={"key": key},
            ) from e

        if existing:
            raise PersistFailure(
                message=f"Tentativa ja existe: {attempt.id}",
                details={"key": key},
            )

        try:
            await self.agentfs.kv.set(key, attempt.model_dump(mode="json"))
        except Exception as e:
            raise PersistFailure(
                message=f"Falha ao gravar tentativa {attempt.id}: {e}",
                details={"key": key},
            ) from e

        logger.debug(f"Tentativa gravada: {key}")
        await self._notify(user_id)

    async def list_attempts(self, user_id: str) -> list[Attempt]:
        """Le todas as tentativas do usuario (sem ordem garantida).

        Raises:
            PersistFailure: Leitura rejeitada pelo store
        """
        prefix = self._collection_prefix(user_id)

        try:
            entries = await self.agentfs.kv.list(prefix=prefix)
        except Exception as e:
            raise PersistFailure(
                message=f"Falha ao listar tentativas: {e}",
                details={"prefix": prefix},
            ) from e

        attempts = []
        for entry in entries or []:
            key = entry.get("key", "") if isinstance(entry, dict) else str(entry)
            if not key.startswith(prefix):
                continue

            try:
                data = await self.agentfs.kv.get(key)
            except Exception as e:
                raise PersistFailure(
                    message=f"Falha ao ler tentativa: {e}",
                    details={"key": key},
                ) from e

            if not data:
                continue

            try:
                attempts.append(Attempt.model_validate(data))
            except ValidationError as e:
                logger.warning(f"Tentativa invalida ignorada ({key}): {e.error_count()} erro(s)")

        return attempts

    async def watch(self, user_id: str, listener: SnapshotListener) -> Callable[[], None]:
        """Observa a colecao do usuario.

        Args:
            user_id: Dono da colecao
            listener: Recebe a lista completa de tentativas a cada mudanca

        Returns:
            Funcao que cancela a observacao (idempotente)
        """
        self._listeners.setdefault(user_id, []).append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(user_id, [])
            if listener in listeners:
                listeners.remove(listener)
            if not listeners:
                self._listeners.pop(user_id, None)

        try:
            listener(await self.list_attempts(user_id))
        except PersistFailure:
            unsubscribe()
            raise

        return unsubscribe

    def watcher_count(self, user_id: str) -> int:
        return len(self._listeners.get(user_id, []))

    async def _notify(self, user_id: str) -> None:
        listeners = list(self._listeners.get(user_id, []))
        if not listeners:
            return

        try:
            snapshot = await self.list_attempts(user_id)
        except PersistFailure as e:
            logger.error(f"Snapshot de progresso indisponivel: {e.message}")
            return

        for listener in listeners:
            listener(list(snapshot))
