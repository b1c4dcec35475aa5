"""Template send services shared by the trigger dispatcher and the admin API."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import sentry_sdk
from celery.exceptions import SoftTimeLimitExceeded

from .constants import BULK_SEND_ERROR_LIMIT, FAILED_TO_RENDER_SUBJECT, SendStatus
from .exceptions import EmailGatewayError, EmailLogWriteError, TemplateNotFoundError
from .gateway import EmailGateway
from .models import EmailLogEntry, EmailTemplate
from .rendering import render_template, wrap_in_email_layout

logger = logging.getLogger(__name__)

SUBJECT_MAX_LENGTH = EmailLogEntry._meta.get_field("subject").max_length


@dataclass
class SendResult:
    """Outcome of a single send attempt."""

    success: bool
    error: str | None = None

    def __bool__(self) -> bool:
        return self.success


@dataclass
class BulkSendResult:
    sent: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {"sent": self.sent, "failed": self.failed, "errors": self.errors[:BULK_SEND_ERROR_LIMIT]}


@dataclass
class RenderedEmail:
    subject: str
    html: str


def get_template(template_id: str) -> EmailTemplate:
    """Load a template by id.

    Raises:
        TemplateNotFoundError: If no template has this id
    """
    try:
        return EmailTemplate.objects.get(pk=template_id)
    except EmailTemplate.DoesNotExist as e:
        raise TemplateNotFoundError(template_id) from e


def render_email(template: EmailTemplate, data: Mapping[str, Any] | None) -> RenderedEmail:
    """Render a template's subject and layout-wrapped body."""
    subject = render_template(template.subject, data)
    body_html = render_template(template.body, data)
    return RenderedEmail(subject=subject, html=wrap_in_email_layout(body_html))


def write_log_entry(**fields: Any) -> EmailLogEntry | None:
    """Append one audit log entry.

    A failed write is reported to operational logging and Sentry only; it must
    never undo or repeat the send decision that was already made.
    """
    try:
        return EmailLogEntry.objects.create(**fields)
    except Exception as e:
        error = EmailLogWriteError(f"Failed to write email log entry for {fields.get('recipient')}: {e}")
        logger.error(str(error))
        sentry_sdk.capture_exception(error)
        return None


def send_templated_email(
    template_id: str,
    recipient: str,
    data: Mapping[str, Any] | None,
    *,
    gateway: EmailGateway,
    sent_by: str,
    trigger_id: str | None = None,
    document_id: str = "",
    collection: str = "",
) -> SendResult:
    """Render a stored template and send it to one recipient.

    Writes exactly one ``EmailLogEntry`` describing the outcome and never raises:
    a missing template, a provider failure or any unexpected error comes back as
    ``SendResult(success=False, error=...)``. No retries are attempted here.

    The one exception is Celery's ``SoftTimeLimitExceeded``, which is re-raised
    without a log entry so the running task can stop.
    """
    template_name = template_id
    subject = FAILED_TO_RENDER_SUBJECT
    try:
        template = get_template(template_id)
        template_name = template.name
        rendered = render_email(template, data)
        subject = rendered.subject
        gateway.send(recipient, rendered.subject, rendered.html)
    except SoftTimeLimitExceeded:
        # The task deadline ends the whole event, not just this send
        raise
    except Exception as e:
        error_message = str(e) or e.__class__.__name__
        logger.error(f"Email to {recipient} failed (template={template_id}, trigger={trigger_id}): {error_message}")
        # Expected failure modes are recorded in the log; anything else is a bug
        if not isinstance(e, (TemplateNotFoundError, EmailGatewayError)):
            sentry_sdk.capture_exception(e)
        status = SendStatus.FAILED
        result = SendResult(success=False, error=error_message)
    else:
        logger.info(f"Email sent to {recipient} (template={template_id}, trigger={trigger_id})")
        status = SendStatus.SENT
        error_message = ""
        result = SendResult(success=True)

    write_log_entry(
        trigger_id=trigger_id,
        template_id=template_id,
        template_name=template_name,
        recipient=recipient,
        subject=subject[:SUBJECT_MAX_LENGTH],
        status=status,
        error=error_message,
        sent_by=sent_by,
        document_id=document_id or "",
        collection=collection or "",
    )
    return result


def send_bulk_templated_email(
    template_id: str,
    recipients: Iterable[Mapping[str, Any]],
    *,
    gateway: EmailGateway,
    sent_by: str,
) -> BulkSendResult:
    """Send one template to many recipients, one at a time.

    Each item is ``{"email": ..., "data": {...}}``. Per-recipient failures are
    counted and collected; they do not stop the batch.
    """
    result = BulkSendResult()
    for item in recipients:
        email = item["email"]
        outcome = send_templated_email(
            template_id,
            email,
            item.get("data") or {},
            gateway=gateway,
            sent_by=sent_by,
        )
        if outcome.success:
            result.sent += 1
        else:
            result.failed += 1
            result.errors.append(f"{email}: {outcome.error}")

    logger.info(f"Bulk send of template {template_id} finished: {result.sent} sent, {result.failed} failed")
    return result


def preview_template(template_id: str, data: Mapping[str, Any] | None) -> RenderedEmail:
    """Render a template without sending or logging anything.

    Raises:
        TemplateNotFoundError: If no template has this id
    """
    return render_email(get_template(template_id), data)
