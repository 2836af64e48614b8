"""
Email Templates - sequência de emails enviada após a geração

- immediate: descrição gerada (envio imediato)
- two_hour: follow-up de dor (agendado +2h)
- six_hour: oferta one-time com link de checkout (agendado +6h)
"""
from html import escape
from urllib.parse import quote

from domain.entities.email_message import EmailMessage


IMMEDIATE = "immediate"
TWO_HOUR = "two_hour"
SIX_HOUR = "six_hour"

# Mesmo conjunto de caracteres preservados por encodeURIComponent
_URI_COMPONENT_SAFE = "!*'()~"


class EmailTemplates:
    """Renderiza os três emails da sequência com rodapé de compliance"""

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip('/')

    def unsubscribe_url(self, email: str) -> str:
        return f"{self.base_url}/api/unsubscribe?email={quote(email, safe=_URI_COMPONENT_SAFE)}"

    def privacy_url(self) -> str:
        return f"{self.base_url}/privacy"

    def _footer(self, email: str, with_reason: bool = False) -> str:
        reason = ""
        if with_reason:
            reason = (
                "\n             You're receiving this email because you requested a product description from our service."
                "\n             <br>"
            )
        return f"""<hr style="border: none; border-top: 1px solid #e0e0e0; margin: 20px 0;">
           <p style="font-size: 12px; color: #666;">{reason}
             <a href="{escape(self.unsubscribe_url(email))}" style="color: #666;">Unsubscribe</a> |
             <a href="{escape(self.privacy_url())}" style="color: #666;">Privacy Policy</a>
           </p>"""

    def immediate(self, description: str, email: str) -> EmailMessage:
        """Email com a descrição gerada"""
        body = escape(description).replace('\n', '<br>')
        html = f"""<p>Hi there,</p>
           <p>Thanks for trying our AI product description generator. Here is the description you generated:</p>
           <div style="background-color: #f4f4f4; border-radius: 8px; padding: 20px; margin: 20px 0;">
             <p>{body}</p>
           </div>
           <p>It's pretty good, right? But now, imagine this level of quality for <strong>all</strong> your products. Keep an eye out for another email from us in a couple of hours with an idea for you.</p>
           <p>Best,<br>The Team</p>
           {self._footer(email, with_reason=True)}"""
        return EmailMessage(
            template=IMMEDIATE,
            subject="Here's your free AI-generated description!",
            html=html
        )

    def two_hour(self, email: str) -> EmailMessage:
        """Follow-up: descrições ruins custam vendas"""
        html = f"""<p>Hi again,</p>
           <p>That one description we sent you is already better than 90% of descriptions online. But what about the rest of your store?</p>
           <p>Most e-commerce stores have descriptions that are:
           <ul>
             <li>Copied from the manufacturer</li>
             <li>Too short or full of jargon</li>
             <li>Focused on features, not <strong>benefits</strong></li>
           </ul>
           <p>This is actively costing you sales. Customers are bored, confused, or uninspired. They click away and buy from your competitor.</p>
           <p>We have a solution for this. I'll send you one final email in a few hours with a special one-time offer to fix this permanently.</p>
           <p>Best,<br>The Team</p>
           {self._footer(email)}"""
        return EmailMessage(
            template=TWO_HOUR,
            subject="Are your other product descriptions costing you sales?",
            html=html
        )

    def six_hour(self, checkout_link: str, email: str) -> EmailMessage:
        """Oferta one-time de reescrita do catálogo"""
        html = f"""<p>Hi,</p>
           <p>This is the offer we mentioned. Let's be direct.</p>
           <p>You're losing money with your current product descriptions. We want to fix that, overnight.</p>
           <p>For <strong>$500</strong>, our team of AI-assisted expert copywriters will rewrite your entire product catalog (up to 200 products). We will deliver a simple CSV file with persuasive, SEO-optimized, and benefits-driven descriptions for every product you sell.</p>
           <p>This is a one-time offer to prove our value. No contracts, no subscriptions. Just a one-time flat fee to transform your store.</p>
           <p><strong><a href="{escape(checkout_link)}">Click Here to Get Your $500 Catalog Rewrite</a></strong></p>
           <p>After you pay, simply reply to the confirmation email with a link to your store or a CSV of your products, and we'll have the new descriptions back to you within 24 hours.</p>
           <p>This offer is only for new users of our free tool. Don't miss it.</p>
           <p>Best,<br>The Team</p>
           {self._footer(email)}"""
        return EmailMessage(
            template=SIX_HOUR,
            subject="One-Time Offer: We'll Rewrite Your Entire Catalog for $500",
            html=html
        )
