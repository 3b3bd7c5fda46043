"""Progress Synchronizer - Persistencia de tentativas e historico ao vivo."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from core.exceptions import PersistFailure
from quiz.models.schemas import Attempt

from .store import AttemptStore

logger = logging.getLogger(__name__)

_CLOSED = object()


class AttemptStatus(str, Enum):
    """Estado local de uma tentativa enviada ao store."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass
class AttemptRecord:
    """Visao local de uma tentativa (separada do stream remoto)."""

    attempt: Attempt
    status: AttemptStatus = AttemptStatus.PENDING
    error: str | None = None


def sort_attempts(attempts: list[Attempt]) -> list[Attempt]:
    """Mais recente primeiro; empates de timestamp ordenados por ID."""
    return sorted(attempts, key=lambda a: (-a.timestamp, a.id))


class Subscription:
    """Handle de uma observacao do historico.

    Iteravel assincrono de snapshots ordenados. Deve ser liberado com
    ``release()`` ou usado com ``async with``.

    Example:
        >>> async with await sync.subscribe() as subscription:
        ...     async for snapshot in subscription:
        ...         render(snapshot)
    """

    def __init__(self, scope: str):
        self.scope = scope
        self.latest: list[Attempt] | None = None
        self._queue: asyncio.Queue = asyncio.Queue()
        self._unsubscribe: Callable[[], None] | None = None
        self._on_release: Callable[[Subscription], None] | None = None
        self.released = False

    def _push(self, snapshot: list[Attempt]) -> None:
        if self.released:
            return
        ordered = sort_attempts(snapshot)
        self.latest = ordered
        self._queue.put_nowait(ordered)

    def release(self) -> None:
        """Cancela a observacao (idempotente)."""
        if self.released:
            return
        self.released = True
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._on_release is not None:
            self._on_release(self)
        self._queue.put_nowait(_CLOSED)

    def __aiter__(self) -> Subscription:
        return self

    async def __anext__(self) -> list[Attempt]:
        item = await self._queue.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        return item

    async def __aenter__(self) -> Subscription:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.release()


class ProgressSynchronizer:
    """Encaminha tentativas ao store e expoe o historico ordenado.

    - ``record`` agenda a escrita sem bloquear; o registro local passa de
      pending para confirmed e sai do mapa local (ou failed, apenas logado)
    - ``subscribe`` devolve um handle por escopo; assinar de novo o mesmo
      escopo libera o handle anterior
    - O stream remoto e a unica fonte do historico; registros pendentes
      ficam em ``pending`` e nao sao mesclados

    Example:
        >>> sync = ProgressSynchronizer(store, user_id="user-1")
        >>> sync.record(attempt)
        >>> subscription = await sync.subscribe()
        >>> await sync.close()
    """

    def __init__(self, store: AttemptStore, user_id: str):
        self.store = store
        self.user_id = user_id
        self._records: dict[str, AttemptRecord] = {}
        self._tasks: set[asyncio.Task] = set()
        self._subscriptions: dict[str, Subscription] = {}

    # =========================================================================
    # ESCRITA
    # =========================================================================

    def record(self, attempt: Attempt) -> AttemptRecord:
        """Agenda a persistencia da tentativa (fire-and-forget)."""
        record = AttemptRecord(attempt=attempt)
        self._records[attempt.id] = record

        task = asyncio.get_running_loop().create_task(self._persist(record))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        logger.debug(f"Tentativa {attempt.id} agendada ({attempt.score}/{attempt.total})")
        return record

    async def _persist(self, record: AttemptRecord) -> None:
        try:
            await self.store.create(self.user_id, record.attempt)
        except PersistFailure as e:
            record.status = AttemptStatus.FAILED
            record.error = e.message
            logger.error(f"Falha ao salvar tentativa {record.attempt.id}: {e.message}")
            return

        record.status = AttemptStatus.CONFIRMED
        # Confirmadas ja estao no stream remoto
        self._records.pop(record.attempt.id, None)
        logger.info(f"Tentativa {record.attempt.id} confirmada")

    @property
    def records(self) -> list[AttemptRecord]:
        """Registros locais ainda pendentes ou com falha."""
        return list(self._records.values())

    @property
    def pending(self) -> list[AttemptRecord]:
        return [r for r in self._records.values() if r.status == AttemptStatus.PENDING]

    async def flush(self) -> None:
        """Aguarda todas as escritas agendadas."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # =========================================================================
    # LEITURA
    # =========================================================================

    async def subscribe(self, user_scope: str | None = None) -> Subscription:
        """Abre observacao do historico do escopo (default: usuario atual).

        Raises:
            PersistFailure: Snapshot inicial indisponivel
        """
        scope = user_scope or self.user_id

        previous = self._subscriptions.get(scope)
        if previous is not None:
            logger.debug(f"Substituindo assinatura ativa de {scope}")
            previous.release()

        subscription = Subscription(scope)
        subscription._on_release = self._forget
        self._subscriptions[scope] = subscription

        try:
            unsubscribe = await self.store.watch(scope, subscription._push)
        except PersistFailure:
            subscription.release()
            raise

        # Liberado durante o snapshot inicial (nova assinatura ou close)
        if subscription.released:
            unsubscribe()
            return subscription

        subscription._unsubscribe = unsubscribe
        return subscription

    def _forget(self, subscription: Subscription) -> None:
        if self._subscriptions.get(subscription.scope) is subscription:
            del self._subscriptions[subscription.scope]

    def active_subscription(self, user_scope: str | None = None) -> Subscription | None:
        return self._subscriptions.get(user_scope or self.user_id)

    async def history(self, user_scope: str | None = None) -> list[Attempt]:
        """Leitura pontual do historico ordenado."""
        return sort_attempts(await self.store.list_attempts(user_scope or self.user_id))

    async def close(self) -> None:
        """Libera assinaturas e aguarda escritas pendentes."""
        for subscription in list(self._subscriptions.values()):
            subscription.release()
        await self.flush()
