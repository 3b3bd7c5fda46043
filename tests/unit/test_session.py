# =============================================================================
# TESTES - Session Context
# =============================================================================
# Testes unitarios para abertura, fluxo completo e encerramento da sessao
# =============================================================================

import pytest


@pytest.fixture
def config():
    from core.config import StudyBuddyConfig

    return StudyBuddyConfig(api_key="test", app_id="app", user_id="u1", backoff_base=0.0)


class TestIdentity:
    """Testes para StaticIdentity."""

    def test_configured_id(self):
        """ID configurado e usado."""
        from core.session import StaticIdentity

        assert StaticIdentity("abc").get_user_id() == "abc"

    def test_generated_id(self):
        """Sem ID, gera um por sessao."""
        from core.session import StaticIdentity

        assert StaticIdentity().get_user_id() != StaticIdentity().get_user_id()


class TestOpenClose:
    """Testes para SessionContext.open/close."""

    @pytest.mark.asyncio
    async def test_components_wired(self, config, mock_agentfs, make_transport):
        """Componentes compartilham cliente e configuracao."""
        from core.session import SessionContext

        session = await SessionContext.open(config, agentfs=mock_agentfs, transport=make_transport())

        assert session.user_id == "u1"
        assert session.quiz.client is session.client
        assert session.chat.client is session.client
        assert session.chat.assembler.char_limit == 2500
        assert session.store.app_id == "app"
        assert session.client.max_attempts == 3
        await session.close()

    @pytest.mark.asyncio
    async def test_borrowed_agentfs_not_closed(self, config, mock_agentfs, make_transport):
        """AgentFS recebido de fora nao e fechado pela sessao."""
        from core.session import SessionContext

        async with await SessionContext.open(
            config, agentfs=mock_agentfs, transport=make_transport()
        ) as session:
            pass

        assert session.closed
        mock_agentfs.close.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_close_idempotent(self, config, mock_agentfs, make_transport):
        """Fechar duas vezes e seguro."""
        from core.session import SessionContext

        session = await SessionContext.open(config, agentfs=mock_agentfs, transport=make_transport())

        await session.close()
        await session.close()

        assert session.closed


class TestRevisionFlow:
    """Fluxo: quiz gerado, submetido e tentativa persistida."""

    @pytest.mark.asyncio
    async def test_submit_persists_attempt(
        self, config, mock_agentfs, make_transport, choice_payload, as_json
    ):
        """Submissao grava a tentativa no AgentFS do usuario."""
        from core.session import SessionContext

        transport = make_transport(as_json(choice_payload))
        session = await SessionContext.open(config, agentfs=mock_agentfs, transport=transport)

        question_set = await session.quiz.generate(session.documents.active_text, "choice")
        session.quiz.answer(question_set.questions[0].id, "Unification and reduction")
        session.quiz.submit()
        await session.progress.flush()

        history = await session.progress.history()
        assert len(history) == 1
        assert (history[0].score, history[0].total) == (1, 3)
        assert all(key.startswith("progress:app:users:u1:attempts:") for key in mock_agentfs._storage)
        await session.close()
