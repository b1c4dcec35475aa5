"""Outbound mail gateways.

A gateway is constructed with its credentials and passed explicitly to the
send path; nothing configures a provider client globally.
"""

import logging
from dataclasses import dataclass

import requests
from django.conf import settings
from django.core.mail import EmailMultiAlternatives, get_connection
from django.utils.html import strip_tags
from django.utils.module_loading import import_string

from .exceptions import EmailGatewayError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sender:
    email: str
    name: str = ""
    reply_to: str = ""

    @classmethod
    def from_settings(cls) -> "Sender":
        return cls(
            email=settings.EMAIL_SYSTEM_FROM_EMAIL,
            name=settings.EMAIL_SYSTEM_FROM_NAME,
            reply_to=settings.EMAIL_SYSTEM_REPLY_TO,
        )


class EmailGateway:
    """Interface for sending one HTML email to one recipient."""

    def __init__(self, sender: Sender | None = None, timeout: float | None = None):
        self.sender = sender or Sender.from_settings()
        self.timeout = timeout if timeout is not None else settings.EMAIL_GATEWAY_TIMEOUT

    @classmethod
    def from_settings(cls) -> "EmailGateway":
        return cls()

    def send(self, recipient: str, subject: str, html: str) -> None:
        """Deliver the message or raise ``EmailGatewayError``."""
        raise NotImplementedError


class SendGridGateway(EmailGateway):
    """Sends through the SendGrid v3 ``mail/send`` HTTP API."""

    def __init__(
        self,
        api_key: str,
        sender: Sender | None = None,
        timeout: float | None = None,
        api_url: str | None = None,
    ):
        super().__init__(sender=sender, timeout=timeout)
        if not api_key:
            raise EmailGatewayError("SendGrid API key is not configured")
        self.api_key = api_key
        self.api_url = api_url or settings.SENDGRID_API_URL

    @classmethod
    def from_settings(cls) -> "SendGridGateway":
        return cls(api_key=settings.SENDGRID_API_KEY)

    def build_payload(self, recipient: str, subject: str, html: str) -> dict:
        sender = {"email": self.sender.email}
        if self.sender.name:
            sender["name"] = self.sender.name

        payload = {
            "personalizations": [{"to": [{"email": recipient}]}],
            "from": sender,
            "subject": subject,
            "content": [{"type": "text/html", "value": html}],
        }
        if self.sender.reply_to:
            payload["reply_to"] = {"email": self.sender.reply_to}
        return payload

    def send(self, recipient: str, subject: str, html: str) -> None:
        try:
            response = requests.post(
                self.api_url,
                json=self.build_payload(recipient, subject, html),
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise EmailGatewayError(f"SendGrid request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise EmailGatewayError(
                f"SendGrid returned status={response.status_code}: {response.text[:500]}",
                status_code=response.status_code,
            )
        logger.debug(f"SendGrid accepted message to {recipient}; status={response.status_code}")


class DjangoMailGateway(EmailGateway):
    """Sends through the configured Django ``EMAIL_BACKEND``."""

    def send(self, recipient: str, subject: str, html: str) -> None:
        from_email = f"{self.sender.name} <{self.sender.email}>" if self.sender.name else self.sender.email
        message = EmailMultiAlternatives(
            subject=subject,
            body=strip_tags(html).strip(),
            from_email=from_email,
            to=[recipient],
            reply_to=[self.sender.reply_to] if self.sender.reply_to else None,
            connection=get_connection(timeout=self.timeout),
        )
        message.attach_alternative(html, "text/html")
        try:
            message.send(fail_silently=False)
        except Exception as e:
            raise EmailGatewayError(f"Mail backend failed: {e}") from e


def get_email_gateway(path: str | None = None) -> EmailGateway:
    """Instantiate the gateway class named by ``EMAIL_GATEWAY_BACKEND``."""
    gateway_cls = import_string(path or settings.EMAIL_GATEWAY_BACKEND)
    return gateway_cls.from_settings()
