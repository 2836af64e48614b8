"""Gemini Provider Package"""

from infrastructure.adapters.output.providers.gemini.gemini_description_generator import GeminiDescriptionGenerator

__all__ = ['GeminiDescriptionGenerator']
