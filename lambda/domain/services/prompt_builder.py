"""
Prompt Builder - instruções enviadas ao LLM para gerar a descrição
"""

_DESCRIPTION_PROMPT = """
You are a world-class e-commerce copywriter specializing in direct-to-consumer sales. Your tone is persuasive, high-end, and benefits-driven.

Generate a compelling, 100-word product description for the following product.

**Product Name:** {product_name}
**Key Features:** {product_features}

Focus on benefits, not just features. Use emotional language to paint a picture of how the product will improve the customer's life. Start with a strong hook and end with a soft call-to-action. Do not use markdown.
"""


def build_description_prompt(product_name: str, product_features: str) -> str:
    """
    Monta o prompt de copywriting

    Args:
        product_name: Nome do produto (já sanitizado)
        product_features: Features do produto (já sanitizadas)

    Returns:
        Prompt completo para o provider de LLM
    """
    return _DESCRIPTION_PROMPT.format(
        product_name=product_name,
        product_features=product_features
    )
