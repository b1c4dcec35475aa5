"""Document-change event dispatch for email triggers."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import sentry_sdk
from celery.exceptions import SoftTimeLimitExceeded
from django.conf import settings
from django.utils import timezone

from .conditions import matches_conditions
from .constants import SENT_BY_SYSTEM_TRIGGER
from .gateway import EmailGateway
from .models import EmailTrigger
from .rendering import build_email_data
from .services import send_templated_email

logger = logging.getLogger(__name__)


@dataclass
class DispatchSummary:
    """Counters describing what one event did; used for logging and tests."""

    collection: str
    event: str
    document_id: str
    matched: int = 0
    skipped: int = 0
    sent: int = 0
    failed: int = 0
    errored: int = 0

    @property
    def dispatched(self) -> int:
        return self.sent + self.failed


class TriggerDispatcher:
    """Runs every enabled trigger bound to a document-change event.

    Triggers are processed one at a time, in store order. A trigger is skipped
    without any log entry when its conditions fail or the recipient field is
    empty. Otherwise the template is sent, and the trigger's ``send_count`` and
    ``last_triggered`` are updated whether the send succeeded or not. An error
    in one trigger never stops the remaining ones.

    Delivery is at-least-once and there is no idempotency key: a redelivered
    event sends again and appends another log entry.
    """

    def __init__(self, gateway: EmailGateway, max_triggers: int | None = None):
        self.gateway = gateway
        self.max_triggers = max_triggers if max_triggers is not None else settings.EMAIL_TRIGGER_MAX_PER_EVENT

    def handle(
        self,
        collection: str,
        event: str,
        document_id: str,
        document: Mapping[str, Any],
    ) -> DispatchSummary:
        summary = DispatchSummary(collection=collection, event=event, document_id=str(document_id))

        triggers = list(EmailTrigger.objects.matching(collection, event))
        if not triggers:
            logger.info(f"No email triggers for collection={collection} event={event}")
            return summary

        summary.matched = len(triggers)
        if self.max_triggers and len(triggers) > self.max_triggers:
            logger.warning(
                f"{len(triggers)} email triggers match collection={collection} event={event}; "
                f"only the first {self.max_triggers} are processed"
            )
            triggers = triggers[: self.max_triggers]

        logger.info(
            f"Processing {len(triggers)} email triggers for collection={collection} "
            f"event={event} document={document_id}"
        )

        for index, trigger in enumerate(triggers):
            try:
                self.process_trigger(trigger, summary, document)
            except SoftTimeLimitExceeded:
                remaining = [t.pk for t in triggers[index:]]
                logger.warning(
                    f"Time limit reached for {collection}/{document_id} ({event}); "
                    f"email triggers not processed: {remaining}"
                )
                raise
            except Exception as e:
                summary.errored += 1
                logger.exception(f"Email trigger {trigger.pk} failed for document {document_id}: {e}")
                sentry_sdk.capture_exception(e)

        logger.info(
            f"Email triggers done for {collection}/{document_id} ({event}): "
            f"sent={summary.sent} failed={summary.failed} skipped={summary.skipped} errored={summary.errored}"
        )
        return summary

    def process_trigger(self, trigger: EmailTrigger, summary: DispatchSummary, document: Mapping[str, Any]) -> None:
        if not matches_conditions(document, trigger.conditions):
            logger.info(f"Conditions not met for email trigger {trigger.pk}")
            summary.skipped += 1
            return

        recipient = document.get(trigger.recipient_field)
        if not recipient:
            logger.warning(f"No recipient for email trigger {trigger.pk} (field={trigger.recipient_field!r})")
            summary.skipped += 1
            return

        email_data = build_email_data(document, trigger.data_mapping)
        result = send_templated_email(
            trigger.template_id,
            str(recipient),
            email_data,
            gateway=self.gateway,
            sent_by=SENT_BY_SYSTEM_TRIGGER,
            trigger_id=trigger.pk,
            document_id=summary.document_id,
            collection=summary.collection,
        )
        if result.success:
            summary.sent += 1
        else:
            summary.failed += 1

        # Counted per attempt, after the send regardless of its outcome
        EmailTrigger.objects.record_attempt(trigger.pk, at=timezone.now())
