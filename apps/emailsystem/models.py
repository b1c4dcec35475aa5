"""Models for email templates, triggers and the send audit log."""

import uuid
from datetime import datetime

from django.db import models
from django.db.models import F
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from libs.models import AutoIdMixin, BaseModel

from .constants import DocumentEvent, SendStatus, TriggerType


class EmailTemplate(AutoIdMixin, BaseModel):
    """A parameterized subject/body pair with ``{{path}}`` placeholders."""

    ID_PREFIX = "template"

    id = models.CharField(
        primary_key=True,
        max_length=100,
        blank=True,
        verbose_name=_("Template ID"),
        help_text=_("Stable identifier referenced by triggers, e.g. 'welcome'"),
    )
    name = models.CharField(max_length=200, verbose_name=_("Name"))
    subject = models.CharField(max_length=500, verbose_name=_("Subject"))
    body = models.TextField(verbose_name=_("Body"), help_text=_("HTML body; wrapped in the email layout when sent"))
    variables = models.JSONField(
        default=list,
        blank=True,
        verbose_name=_("Variables"),
        help_text=_("Documented placeholders: list of {name, description, example}"),
    )

    class Meta:
        verbose_name = _("Email template")
        verbose_name_plural = _("Email templates")
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"


class EmailTriggerQuerySet(models.QuerySet):
    def matching(self, collection: str, event: str) -> "EmailTriggerQuerySet":
        """Enabled triggers bound to a (collection, event) pair, in store order."""
        return self.filter(collection=collection, event=event, enabled=True).order_by("created_at", "id")

    def record_attempt(self, trigger_id: str, at: datetime | None = None) -> int:
        """Bump ``send_count`` and stamp ``last_triggered`` for one dispatch attempt.

        The counter tracks attempts, not deliveries, and is not transactional with
        the send itself. Use the log entries for exact counts.
        """
        return self.filter(pk=trigger_id).update(
            last_triggered=at or timezone.now(),
            send_count=F("send_count") + 1,
        )


class EmailTrigger(AutoIdMixin, BaseModel):
    """A rule sending a template when a document in a collection changes."""

    ID_PREFIX = "trigger"

    id = models.CharField(primary_key=True, max_length=100, blank=True, verbose_name=_("Trigger ID"))
    name = models.CharField(max_length=200, verbose_name=_("Name"))
    description = models.TextField(blank=True, verbose_name=_("Description"))
    enabled = models.BooleanField(default=True, verbose_name=_("Enabled"), db_index=True)
    # Plain id rather than a foreign key: a dangling reference must surface as a failed send
    template_id = models.CharField(max_length=100, verbose_name=_("Template ID"))
    trigger_type = models.CharField(
        max_length=20,
        choices=TriggerType.choices,
        default=TriggerType.DOCUMENT,
        verbose_name=_("Trigger type"),
    )
    collection = models.CharField(max_length=100, blank=True, verbose_name=_("Collection"))
    event = models.CharField(
        max_length=10,
        choices=DocumentEvent.choices,
        blank=True,
        verbose_name=_("Event"),
    )
    conditions = models.JSONField(
        default=list,
        blank=True,
        verbose_name=_("Conditions"),
        help_text=_("List of {field, operator, value}; all must match"),
    )
    recipient_field = models.CharField(
        max_length=100,
        default="email",
        verbose_name=_("Recipient field"),
        help_text=_("Document field holding the recipient address"),
    )
    data_mapping = models.JSONField(
        default=dict,
        blank=True,
        verbose_name=_("Data mapping"),
        help_text=_("Template variable -> document field name or {{expression}}"),
    )
    last_triggered = models.DateTimeField(null=True, blank=True, verbose_name=_("Last triggered"))
    send_count = models.PositiveBigIntegerField(default=0, verbose_name=_("Send attempts"))

    objects = EmailTriggerQuerySet.as_manager()

    class Meta:
        verbose_name = _("Email trigger")
        verbose_name_plural = _("Email triggers")
        ordering = ["name"]
        indexes = [
            models.Index(fields=["collection", "event", "enabled"], name="emailsystem_collect_5b1f0e_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.collection}.{self.event})"


class EmailLogEntry(models.Model):
    """Append-only record of one send attempt, automated or manual."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    trigger_id = models.CharField(
        max_length=100,
        null=True,
        blank=True,
        db_index=True,
        verbose_name=_("Trigger ID"),
        help_text=_("Empty for manually issued sends"),
    )
    template_id = models.CharField(max_length=100, db_index=True, verbose_name=_("Template ID"))
    template_name = models.CharField(max_length=200, verbose_name=_("Template name"))
    recipient = models.CharField(max_length=254, db_index=True, verbose_name=_("Recipient"))
    subject = models.CharField(max_length=500, verbose_name=_("Subject"))
    status = models.CharField(
        max_length=10,
        choices=SendStatus.choices,
        db_index=True,
        verbose_name=_("Status"),
    )
    error = models.TextField(blank=True, verbose_name=_("Error"))
    sent_at = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_("Sent at"))
    sent_by = models.CharField(max_length=150, verbose_name=_("Sent by"))
    document_id = models.CharField(max_length=100, blank=True, verbose_name=_("Document ID"))
    collection = models.CharField(max_length=100, blank=True, verbose_name=_("Collection"))

    class Meta:
        verbose_name = _("Email log entry")
        verbose_name_plural = _("Email log entries")
        ordering = ["-sent_at"]
        indexes = [
            models.Index(fields=["-sent_at"], name="emailsystem_sent_at_3c9d2a_idx"),
            models.Index(fields=["status", "-sent_at"], name="emailsystem_status_8e4b71_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.recipient} - {self.status}"
