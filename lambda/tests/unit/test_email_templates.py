"""
Testes para a sequência de emails (imediato, +2h, +6h)
"""
from datetime import datetime, timezone

import pytest

from domain.services.email_templates import EmailTemplates, IMMEDIATE, SIX_HOUR, TWO_HOUR


@pytest.fixture
def templates():
    return EmailTemplates('https://app.example.com/')


class TestLinks:

    def test_unsubscribe_url_encodes_email(self, templates):
        """REGRA: Email vai codificado como encodeURIComponent"""
        url = templates.unsubscribe_url('first+last@example.com')
        assert url == 'https://app.example.com/api/unsubscribe?email=first%2Blast%40example.com'

    def test_privacy_url(self, templates):
        assert templates.privacy_url() == 'https://app.example.com/privacy'


class TestImmediateEmail:

    def test_subject_and_body(self, templates):
        message = templates.immediate('Line one\nLine two', 'buyer@example.com')

        assert message.template == IMMEDIATE
        assert message.subject == "Here's your free AI-generated description!"
        assert 'Line one<br>Line two' in message.html
        assert "You're receiving this email because" in message.html
        assert 'api/unsubscribe?email=buyer%40example.com' in message.html
        assert message.is_scheduled is False

    def test_description_is_escaped(self, templates):
        """REGRA: Texto do LLM nunca é injetado como HTML"""
        message = templates.immediate('<img src=x onerror=alert(1)>', 'buyer@example.com')
        assert '<img' not in message.html
        assert '&lt;img' in message.html


class TestFollowUpEmails:

    def test_two_hour(self, templates):
        message = templates.two_hour('buyer@example.com')

        assert message.template == TWO_HOUR
        assert message.subject == 'Are your other product descriptions costing you sales?'
        assert 'Unsubscribe' in message.html
        assert "You're receiving this email because" not in message.html

    def test_six_hour_contains_checkout_link(self, templates):
        message = templates.six_hour('https://buy.stripe.com/abc?x=1&y=2', 'buyer@example.com')

        assert message.template == SIX_HOUR
        assert message.subject == "One-Time Offer: We'll Rewrite Your Entire Catalog for $500"
        assert 'href="https://buy.stripe.com/abc?x=1&amp;y=2"' in message.html

    def test_schedule_returns_copy(self, templates):
        message = templates.two_hour('buyer@example.com')
        when = datetime(2025, 1, 15, 14, 0, tzinfo=timezone.utc)

        scheduled = message.schedule(when)

        assert scheduled.scheduled_at == when
        assert scheduled.is_scheduled
        assert message.scheduled_at is None
        assert scheduled.html == message.html
