"""
Configurações compartilhadas por todos os testes
"""
import os

# APM desligado nos testes (sem agent Datadog local)
os.environ.setdefault('DD_TRACE_ENABLED', 'false')
os.environ.setdefault('ENVIRONMENT', 'test')

import pytest

from infrastructure.adapters.output.http.aiohttp_session_manager import AiohttpSessionManager
from infrastructure.adapters.output.providers.provider_factory import reset_provider_factory


@pytest.fixture(autouse=True)
def reset_singletons():
    """Cada teste começa sem factory nem session manager em cache"""
    reset_provider_factory()
    AiohttpSessionManager.reset_instance()
    yield
    reset_provider_factory()
    AiohttpSessionManager.reset_instance()
