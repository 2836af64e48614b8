"""
Provider Factory - criação centralizada dos providers externos
(Supabase, Resend e Gemini)
"""
from typing import Optional

from application.ports.output.description_generator_port import IDescriptionGenerator
from application.ports.output.email_sender_port import IEmailSender
from application.ports.output.lead_repository_port import ILeadRepository
from infrastructure.adapters.output.providers.gemini import GeminiDescriptionGenerator
from infrastructure.adapters.output.providers.resend import ResendEmailSender
from infrastructure.adapters.output.providers.supabase import SupabaseLeadRepository
from shared.config.settings import Settings


class ProviderFactory:
    """
    Factory simples para os providers da Lambda.
    Mantém lazy-loading e singleton para reuso em execução quente.

    As credenciais são validadas só quando o provider é pedido:
    o health check precisa funcionar mesmo sem elas.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._lead_repository: Optional[ILeadRepository] = None
        self._email_sender: Optional[IEmailSender] = None
        self._description_generator: Optional[IDescriptionGenerator] = None

    def get_lead_repository(self) -> ILeadRepository:
        if self._lead_repository is None:
            self.settings.require_database_credentials()
            self._lead_repository = SupabaseLeadRepository(
                supabase_url=self.settings.supabase_url,
                service_key=self.settings.supabase_service_key,
                table_name=self.settings.leads_table_name
            )
        return self._lead_repository

    def get_email_sender(self) -> IEmailSender:
        if self._email_sender is None:
            self.settings.require_generation_credentials()
            self._email_sender = ResendEmailSender(api_key=self.settings.resend_api_key)
        return self._email_sender

    def get_description_generator(self) -> IDescriptionGenerator:
        if self._description_generator is None:
            self.settings.require_generation_credentials()
            self._description_generator = GeminiDescriptionGenerator(
                api_key=self.settings.gemini_api_key,
                model=self.settings.gemini_model
            )
        return self._description_generator


# Factory singleton global
_factory_instance: Optional[ProviderFactory] = None


def get_provider_factory(settings: Settings) -> ProviderFactory:
    """
    Retorna singleton da factory.
    Recria quando o ambiente muda (ex: variáveis alteradas entre invocações).
    """
    global _factory_instance

    if _factory_instance is None or _factory_instance.settings != settings:
        _factory_instance = ProviderFactory(settings)

    return _factory_instance


def reset_provider_factory() -> None:
    """Descarta o singleton (útil para testes)"""
    global _factory_instance
    _factory_instance = None
