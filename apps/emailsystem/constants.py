"""Constants for the email trigger engine."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class DocumentEvent(models.TextChoices):
    CREATE = "create", _("Create")
    UPDATE = "update", _("Update")
    DELETE = "delete", _("Delete")


class TriggerType(models.TextChoices):
    DOCUMENT = "firestore", _("Document change")
    MANUAL = "manual", _("Manual")


class SendStatus(models.TextChoices):
    SENT = "sent", _("Sent")
    FAILED = "failed", _("Failed")


class ConditionOperator(models.TextChoices):
    EQUALS = "==", _("Equals")
    NOT_EQUALS = "!=", _("Not equals")
    GREATER_THAN = ">", _("Greater than")
    LESS_THAN = "<", _("Less than")
    CONTAINS = "contains", _("Contains")
    EXISTS = "exists", _("Exists")


# sent_by value recorded for sends issued by the trigger dispatcher
SENT_BY_SYSTEM_TRIGGER = "system-trigger"

# Subject recorded when a send fails before the subject could be rendered
FAILED_TO_RENDER_SUBJECT = "Failed to render"

# Number of per-recipient errors returned by a bulk send
BULK_SEND_ERROR_LIMIT = 10

EMAIL_LAYOUT_TEMPLATE = "emailsystem/email_layout.html"
