"""
Configurações centralizadas da aplicação
Lidas do ambiente a cada chamada (nada é resolvido no import)
"""
import os
from dataclasses import dataclass
from typing import Dict, List, Optional

from domain.constants import API, App, Email
from domain.exceptions import ConfigurationException


GENERATION_CREDENTIALS: Dict[str, str] = {
    'SUPABASE_URL': 'Supabase project URL',
    'SUPABASE_SERVICE_KEY': 'Supabase service key',
    'RESEND_API_KEY': 'Resend API key',
    'GEMINI_API_KEY': 'Google Gemini API key'
}

DATABASE_CREDENTIALS = ('SUPABASE_URL', 'SUPABASE_SERVICE_KEY')


@dataclass(frozen=True)
class Settings:
    """Snapshot das variáveis de ambiente"""
    supabase_url: Optional[str]
    supabase_service_key: Optional[str]
    resend_api_key: Optional[str]
    gemini_api_key: Optional[str]
    gemini_model: str
    from_email: str
    base_url: str
    stripe_checkout_link: Optional[str]
    environment: str
    service_name: str
    cors_origin: str
    leads_table_name: str

    @property
    def is_development(self) -> bool:
        return self.environment == 'development'

    @property
    def database_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_key)

    def _value_for(self, var_name: str) -> Optional[str]:
        return {
            'SUPABASE_URL': self.supabase_url,
            'SUPABASE_SERVICE_KEY': self.supabase_service_key,
            'RESEND_API_KEY': self.resend_api_key,
            'GEMINI_API_KEY': self.gemini_api_key
        }[var_name]

    def missing_generation_credentials(self) -> List[str]:
        """Variáveis obrigatórias ausentes, no formato 'NOME (descrição)'"""
        return [
            f"{var_name} ({description})"
            for var_name, description in GENERATION_CREDENTIALS.items()
            if not self._value_for(var_name)
        ]

    def require_generation_credentials(self) -> None:
        missing = self.missing_generation_credentials()
        if missing:
            raise ConfigurationException(
                f"Missing required environment variables: {', '.join(missing)}",
                details={"missing": missing}
            )

    def require_database_credentials(self) -> None:
        missing = [
            f"{var_name} ({GENERATION_CREDENTIALS[var_name]})"
            for var_name in DATABASE_CREDENTIALS
            if not self._value_for(var_name)
        ]
        if missing:
            raise ConfigurationException(
                f"Missing required environment variables: {', '.join(missing)}",
                details={"missing": missing}
            )


def _env(name: str) -> Optional[str]:
    value = os.environ.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def load_settings() -> Settings:
    """Lê o ambiente atual"""
    return Settings(
        supabase_url=_env('SUPABASE_URL'),
        supabase_service_key=_env('SUPABASE_SERVICE_KEY'),
        resend_api_key=_env('RESEND_API_KEY'),
        gemini_api_key=_env('GEMINI_API_KEY'),
        gemini_model=_env('GEMINI_MODEL') or API.GEMINI_DEFAULT_MODEL,
        from_email=_env('FROM_EMAIL') or Email.DEFAULT_FROM,
        base_url=_env('BASE_URL') or Email.DEFAULT_BASE_URL,
        stripe_checkout_link=_env('STRIPE_CHECKOUT_LINK'),
        environment=_env('ENVIRONMENT') or 'development',
        service_name=_env('DD_SERVICE') or App.DEFAULT_SERVICE_NAME,
        cors_origin=_env('CORS_ORIGIN') or '*',
        leads_table_name=_env('LEADS_TABLE_NAME') or 'leads'
    )
