"""
Domain Constants - Todas as constantes da aplicação centralizadas
Valores fixos; o que depende do ambiente fica em shared/config/settings.py
"""


class App:
    """Identificação da aplicação"""

    VERSION = "1.0.0"
    DEFAULT_SERVICE_NAME = "product-description-generator"


class API:
    """Constantes de APIs externas"""

    # Supabase (PostgREST)
    SUPABASE_REST_PATH = "/rest/v1"

    # Resend
    RESEND_BASE_URL = "https://api.resend.com"

    # Gemini
    GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_DEFAULT_MODEL = "gemini-pro"

    # Timeouts e limites HTTP
    HTTP_TIMEOUT_TOTAL = 35  # segundos (acima do limite do LLM)
    HTTP_TIMEOUT_CONNECT = 3  # segundos
    HTTP_TIMEOUT_READ = 30  # segundos
    HTTP_CONNECTION_LIMIT = 50
    HTTP_CONNECTION_LIMIT_PER_HOST = 10
    DNS_CACHE_TTL = 300  # segundos

    # Retry (tenacity)
    RETRY_ATTEMPTS = 3
    RETRY_WAIT_MIN = 1  # segundos
    RETRY_WAIT_MAX = 4  # segundos
    RETRYABLE_STATUS = (429, 500, 502, 503, 504)

    # Tempo máximo de geração do LLM
    LLM_TIMEOUT_SECONDS = 30


class RateLimit:
    """Limite por IP (memória do container)"""

    WINDOW_SECONDS = 60
    MAX_REQUESTS = 5
    SWEEP_PROBABILITY = 0.01  # 1% das requisições limpam o mapa inteiro
    MESSAGE = "Too many requests. Please try again later."


class Cache:
    """Constantes do cache de respostas"""

    TTL_SECONDS = 300  # 5 minutos
    MAX_ENTRIES = 1024
    KEY_FEATURES_PREFIX = 200  # caracteres das features usados na chave


class Input:
    """Limites de entrada do formulário"""

    PRODUCT_NAME_MAX = 100
    PRODUCT_FEATURES_MAX = 2000


class Email:
    """Sequência de emails transacionais"""

    TWO_HOUR_DELAY_SECONDS = 2 * 60 * 60
    SIX_HOUR_DELAY_SECONDS = 6 * 60 * 60
    DEFAULT_FROM = "Your Name <sales@your-verified-domain.com>"
    DEFAULT_BASE_URL = "https://your-domain.com"


class Messages:
    """Mensagens expostas ao cliente"""

    GENERIC_GENERATION_ERROR = "An error occurred while generating your description."
    GENERIC_UNEXPECTED_ERROR = "An unexpected error occurred"
    METHOD_NOT_ALLOWED = "Method Not Allowed"
