"""
Output Port: Interface do provedor de email transacional
"""
from abc import ABC, abstractmethod
from typing import Optional

from domain.entities.email_message import EmailMessage


class IEmailSender(ABC):
    """Interface para envio de emails (imediatos ou agendados)"""

    @abstractmethod
    async def send(
        self,
        message: EmailMessage,
        to: str,
        sender: str,
        idempotency_key: Optional[str] = None
    ) -> str:
        """
        Envia (ou agenda, se message.scheduled_at) um email

        Args:
            message: Assunto, HTML e agendamento
            to: Destinatário
            sender: Remetente ("Nome <email>")
            idempotency_key: Evita duplicatas em retries

        Returns:
            ID da mensagem no provedor

        Raises:
            EmailDeliveryException: Se o provedor rejeitar a mensagem
        """
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Nome do provider (ex: 'Resend')"""
        pass
