"""Infrastructure Providers - Implementações dos serviços externos"""

from infrastructure.adapters.output.providers.gemini import GeminiDescriptionGenerator
from infrastructure.adapters.output.providers.resend import ResendEmailSender
from infrastructure.adapters.output.providers.supabase import SupabaseLeadRepository
from infrastructure.adapters.output.providers.provider_factory import (
    ProviderFactory,
    get_provider_factory,
    reset_provider_factory
)

__all__ = [
    'GeminiDescriptionGenerator',
    'ResendEmailSender',
    'SupabaseLeadRepository',
    'ProviderFactory',
    'get_provider_factory',
    'reset_provider_factory'
]
