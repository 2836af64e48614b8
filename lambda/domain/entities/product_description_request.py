"""
Product Description Request - pedido já validado e sanitizado
"""
from dataclasses import dataclass

from domain.constants import Cache


@dataclass(frozen=True)
class ProductDescriptionRequest:
    """Entrada sanitizada do formulário de geração"""
    product_name: str
    product_features: str
    email: str

    def cache_key(self) -> str:
        """
        Chave normalizada para o cache de respostas

        Nome e features em minúsculas sem espaços nas bordas; das features
        apenas os primeiros caracteres entram na chave.
        """
        return build_cache_key(self.product_name, self.product_features)


def build_cache_key(product_name: str, product_features: str) -> str:
    normalized_name = product_name.lower().strip()
    normalized_features = product_features.lower().strip()[:Cache.KEY_FEATURES_PREFIX]
    return f"{normalized_name}:{normalized_features}"
