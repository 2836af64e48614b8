"""
Domain Services - Serviços de lógica de negócio pura (sem conhecimento de APIs externas)

IMPORTANTE: chamadas HTTP aos providers pertencem à infrastructure!
- infrastructure/adapters/output/providers/
"""

from domain.services.email_templates import EmailTemplates
from domain.services.prompt_builder import build_description_prompt

__all__ = [
    'EmailTemplates',
    'build_description_prompt'
]
