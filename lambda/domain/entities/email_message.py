"""
Email Message - mensagem transacional pronta para envio
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class EmailMessage:
    """Assunto + corpo HTML; scheduled_at None significa envio imediato"""
    template: str
    subject: str
    html: str
    scheduled_at: Optional[datetime] = None

    @property
    def is_scheduled(self) -> bool:
        return self.scheduled_at is not None

    def schedule(self, when: datetime) -> 'EmailMessage':
        """Cópia da mensagem agendada para `when`"""
        return EmailMessage(
            template=self.template,
            subject=self.subject,
            html=self.html,
            scheduled_at=when
        )
