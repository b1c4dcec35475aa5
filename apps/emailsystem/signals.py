"""Signal receivers turning model changes into document-change events."""

import logging

from django.db import transaction

from .constants import DocumentEvent
from .registry import EmailTriggerSourceRegistry, serialize_document
from .tasks import process_document_event_task

logger = logging.getLogger(__name__)


def enqueue_document_event(collection: str, event: str, document_id: str, document: dict) -> None:
    """Queue trigger processing once the surrounding transaction commits."""
    transaction.on_commit(
        lambda: process_document_event_task.delay(collection, event, document_id, document)
    )


def handle_document_saved(sender, instance, created, raw=False, update_fields=None, **kwargs):
    # Fixture loading (loaddata) must not send emails
    if raw:
        return
    source = EmailTriggerSourceRegistry.get_source(sender)
    if source is None:
        return
    # Saves touching only hidden fields (e.g. last_login) are not document changes
    if update_fields and set(update_fields) <= source.exclude:
        return

    event = DocumentEvent.CREATE if created else DocumentEvent.UPDATE
    logger.debug(f"Queueing {event} event for {source.collection}/{instance.pk}")
    enqueue_document_event(source.collection, str(event), str(instance.pk), serialize_document(instance))


def handle_document_deleted(sender, instance, **kwargs):
    source = EmailTriggerSourceRegistry.get_source(sender)
    if source is None:
        return
    # Deleted rows have no post-change state; the last stored state is sent instead
    logger.debug(f"Queueing delete event for {source.collection}/{instance.pk}")
    enqueue_document_event(
        source.collection, str(DocumentEvent.DELETE), str(instance.pk), serialize_document(instance)
    )
