# =============================================================================
# CONFTEST - Pytest Fixtures Globais
# =============================================================================
# Ambiente isolado para testes sem dependencias externas
# =============================================================================

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Adicionar root ao path
sys.path.insert(0, str(Path(__file__).parent))


# =============================================================================
# FIXTURES DE AMBIENTE
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_env():
    """Configura variaveis de ambiente para testes."""
    env_vars = {
        "GOOGLE_API_KEY": "test-key-123",
        "GEMINI_MODEL": "gemini-2.5-flash",
        "APP_ID": "study-buddy-test",
        "STUDY_BUDDY_USER_ID": "user-test",
        "LOG_LEVEL": "ERROR",
    }
    with patch.dict(os.environ, env_vars):
        yield


@pytest.fixture(autouse=True)
def reset_cached_config():
    """Descarta a configuracao em cache entre testes."""
    from core.config import reset_config

    reset_config()
    yield
    reset_config()


@pytest.fixture
def capture_logs(caplog):
    """Captura logs durante testes."""
    import logging

    caplog.set_level(logging.DEBUG)
    return caplog
