"""
Lead Entity - Entidade de domínio que representa um lead capturado
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


@dataclass
class Lead:
    """Email do usuário e o produto que ele enviou"""
    email: str
    product_name: str
    created_at: datetime
    unsubscribed: bool = False
    unsubscribed_at: Optional[datetime] = None

    @classmethod
    def capture(cls, email: str, product_name: str, now: Optional[datetime] = None) -> 'Lead':
        """Cria lead novo com timestamp UTC"""
        return cls(
            email=email,
            product_name=product_name,
            created_at=now or datetime.now(timezone.utc)
        )

    def to_record(self) -> dict:
        """Linha enviada no upsert (conflito por email atualiza o produto)"""
        return {
            'email': self.email,
            'product_name': self.product_name,
            'created_at': self.created_at.isoformat()
        }
