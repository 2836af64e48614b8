"""
Output Ports - Interfaces para comunicação com infraestrutura externa
Define contratos que devem ser implementados pelos adapters de saída
"""

from .lead_repository_port import ILeadRepository
from .email_sender_port import IEmailSender
from .description_generator_port import IDescriptionGenerator
from .response_cache_port import IResponseCache
