"""
Entrypoint da Lambda (handler configurado como lambda_function.lambda_handler)
Rotas: /api/generate, /api/unsubscribe, /privacy, /api/health
"""
from infrastructure.adapters.input.lambda_handler import lambda_handler

__all__ = ['lambda_handler']
