# =============================================================================
# TESTES - Progress Synchronizer
# =============================================================================
# Testes unitarios para persistencia e historico ao vivo
# =============================================================================

import asyncio

import pytest


@pytest.fixture
def store(mock_agentfs):
    from progress import AttemptStore

    return AttemptStore(mock_agentfs, app_id="app")


class TestSortAttempts:
    """Testes para a ordenacao do historico."""

    def test_most_recent_first(self, make_attempt):
        """Ordem decrescente de timestamp."""
        from progress import sort_attempts

        old = make_attempt(timestamp=1000)
        new = make_attempt(timestamp=2000)

        assert sort_attempts([old, new]) == [new, old]

    def test_ties_broken_by_id(self, make_attempt):
        """Empate de timestamp desempata por ID."""
        from progress import sort_attempts

        b = make_attempt(id="b", timestamp=1000)
        a = make_attempt(id="a", timestamp=1000)

        assert sort_attempts([b, a]) == [a, b]


class TestRecord:
    """Testes para ProgressSynchronizer.record."""

    @pytest.mark.asyncio
    async def test_pending_then_confirmed(self, store, make_attempt):
        """Registro nasce pending e vira confirmed apos a escrita."""
        from progress import AttemptStatus, ProgressSynchronizer

        sync = ProgressSynchronizer(store, "u1")
        record = sync.record(make_attempt())

        assert record.status == AttemptStatus.PENDING
        assert sync.pending == [record]

        await sync.flush()

        assert record.status == AttemptStatus.CONFIRMED
        assert sync.pending == []
        assert len(await sync.history()) == 1

    @pytest.mark.asyncio
    async def test_failed_write_logged(self, failing_agentfs, make_attempt, capture_logs):
        """Escrita rejeitada vira failed e e logada, sem propagar."""
        from progress import AttemptStatus, AttemptStore, ProgressSynchronizer

        sync = ProgressSynchronizer(AttemptStore(failing_agentfs), "u1")
        record = sync.record(make_attempt())

        await sync.flush()

        assert record.status == AttemptStatus.FAILED
        assert "permission denied" in record.error
        assert "Falha ao salvar tentativa" in capture_logs.text

    @pytest.mark.asyncio
    async def test_confirmed_leave_local_records(self, store, make_attempt):
        """Confirmadas saem do mapa local; o historico vem do store."""
        from progress import ProgressSynchronizer

        sync = ProgressSynchronizer(store, "u1")
        for timestamp in (1000, 2000, 3000):
            sync.record(make_attempt(timestamp=timestamp))

        await sync.flush()

        assert sync.records == []
        assert len(await sync.history()) == 3

    @pytest.mark.asyncio
    async def test_failed_record_kept(self, failing_agentfs, make_attempt):
        """Registro com falha continua visivel localmente."""
        from progress import AttemptStatus, AttemptStore, ProgressSynchronizer

        sync = ProgressSynchronizer(AttemptStore(failing_agentfs), "u1")
        record = sync.record(make_attempt())

        await sync.flush()

        assert sync.records == [record]
        assert sync.pending == []
        assert record.status == AttemptStatus.FAILED


class TestSubscribe:
    """Testes para as assinaturas do historico."""

    @pytest.mark.asyncio
    async def test_snapshots_sorted(self, store, make_attempt):
        """Snapshot inicial e atualizacoes chegam ordenados."""
        from progress import ProgressSynchronizer

        sync = ProgressSynchronizer(store, "u1")
        await store.create("u1", make_attempt(timestamp=1000))

        subscription = await sync.subscribe()
        sync.record(make_attempt(timestamp=5000))
        await sync.flush()

        first = await subscription.__anext__()
        second = await subscription.__anext__()

        assert len(first) == 1
        assert [a.timestamp for a in second] == [5000, 1000]
        assert subscription.latest == second
        subscription.release()

    @pytest.mark.asyncio
    async def test_one_handle_per_scope(self, store):
        """Nova assinatura do mesmo escopo libera a anterior."""
        from progress import ProgressSynchronizer

        sync = ProgressSynchronizer(store, "u1")

        first = await sync.subscribe()
        second = await sync.subscribe()

        assert first.released
        assert not second.released
        assert sync.active_subscription() is second
        assert store.watcher_count("u1") == 1

    @pytest.mark.asyncio
    async def test_iteration_ends_on_release(self, store):
        """Liberar encerra a iteracao."""
        from progress import ProgressSynchronizer

        sync = ProgressSynchronizer(store, "u1")
        received = []

        async with await sync.subscribe() as subscription:
            async def consume():
                async for snapshot in subscription:
                    received.append(snapshot)

            consumer = asyncio.create_task(consume())
            await asyncio.sleep(0)

        await asyncio.wait_for(consumer, timeout=1)

        assert received == [[]]
        assert sync.active_subscription() is None
        assert store.watcher_count("u1") == 0

    @pytest.mark.asyncio
    async def test_release_idempotent(self, store):
        """Liberar duas vezes e seguro."""
        from progress import ProgressSynchronizer

        sync = ProgressSynchronizer(store, "u1")
        subscription = await sync.subscribe()

        subscription.release()
        subscription.release()

        assert subscription.released

    @pytest.mark.asyncio
    async def test_failed_subscribe_releases_handle(self, mock_agentfs):
        """Falha no snapshot inicial nao deixa handle ativo."""
        from unittest.mock import AsyncMock

        from core.exceptions import PersistFailure
        from progress import AttemptStore, ProgressSynchronizer

        mock_agentfs.kv.list = AsyncMock(side_effect=RuntimeError("offline"))
        sync = ProgressSynchronizer(AttemptStore(mock_agentfs), "u1")

        with pytest.raises(PersistFailure):
            await sync.subscribe()

        assert sync.active_subscription() is None

    @pytest.mark.asyncio
    async def test_close_releases_and_flushes(self, store, make_attempt):
        """close libera assinaturas e aguarda escritas."""
        from progress import AttemptStatus, ProgressSynchronizer

        sync = ProgressSynchronizer(store, "u1")
        subscription = await sync.subscribe("other-user")
        record = sync.record(make_attempt())

        await sync.close()

        assert subscription.released
        assert record.status == AttemptStatus.CONFIRMED

    @pytest.mark.asyncio
    async def test_concurrent_subscribes_leave_no_listener(self, store, mock_agentfs):
        """Assinaturas simultaneas com snapshot lento nao deixam observador orfao."""
        from progress import ProgressSynchronizer

        list_entries = mock_agentfs.kv.list

        async def slow_list(prefix=""):
            await asyncio.sleep(0.01)
            return await list_entries(prefix=prefix)

        mock_agentfs.kv.list = slow_list
        sync = ProgressSynchronizer(store, "u1")

        first, second = await asyncio.gather(sync.subscribe(), sync.subscribe())

        assert first.released
        assert not second.released
        assert store.watcher_count("u1") == 1

        second.release()
        await sync.close()

        assert store.watcher_count("u1") == 0

    @pytest.mark.asyncio
    async def test_close_during_initial_snapshot(self, store, mock_agentfs):
        """close antes do snapshot inicial terminar libera o observador."""
        from progress import ProgressSynchronizer

        list_entries = mock_agentfs.kv.list

        async def slow_list(prefix=""):
            await asyncio.sleep(0.01)
            return await list_entries(prefix=prefix)

        mock_agentfs.kv.list = slow_list
        sync = ProgressSynchronizer(store, "u1")

        pending = asyncio.create_task(sync.subscribe())
        await asyncio.sleep(0)
        await sync.close()
        subscription = await pending

        assert subscription.released
        assert sync.active_subscription() is None
        assert store.watcher_count("u1") == 0
