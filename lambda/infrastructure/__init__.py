"""
Infrastructure Layer - Clean Architecture
Contém implementações concretas de repositórios e serviços externos
"""

from infrastructure.adapters.output.http.aiohttp_session_manager import get_aiohttp_session_manager
from infrastructure.adapters.output.providers import (
    GeminiDescriptionGenerator,
    ResendEmailSender,
    SupabaseLeadRepository,
    ProviderFactory
)

__all__ = [
    'get_aiohttp_session_manager',
    'GeminiDescriptionGenerator',
    'ResendEmailSender',
    'SupabaseLeadRepository',
    'ProviderFactory'
]
