"""Resend Provider Package"""

from infrastructure.adapters.output.providers.resend.resend_email_sender import ResendEmailSender

__all__ = ['ResendEmailSender']
