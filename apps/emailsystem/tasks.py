"""Celery tasks for the email trigger engine."""

import logging
from typing import Any

from celery import shared_task
from django.conf import settings

from .dispatcher import TriggerDispatcher
from .exceptions import EmailGatewayError
from .gateway import get_email_gateway

logger = logging.getLogger(__name__)


@shared_task(
    acks_late=True,
    reject_on_worker_lost=True,
    soft_time_limit=settings.EMAIL_TRIGGER_TASK_SOFT_TIME_LIMIT,
)
def process_document_event_task(
    collection: str,
    event: str,
    document_id: str,
    document: dict[str, Any],
) -> dict[str, Any]:
    """Run the email triggers for one document-change event.

    The task may be delivered more than once; every delivery sends again.

    Args:
        collection: Collection name the document belongs to
        event: One of create, update, delete
        document_id: Primary key of the changed document
        document: JSON snapshot of the document after the change

    Returns:
        Dictionary with dispatch counters
    """
    try:
        gateway = get_email_gateway()
    except EmailGatewayError as e:
        logger.error(f"Email gateway not available, skipping triggers for {collection}/{document_id} ({event}): {e}")
        return {"collection": collection, "event": event, "document_id": document_id, "error": str(e)}

    dispatcher = TriggerDispatcher(gateway=gateway)
    summary = dispatcher.handle(collection, event, document_id, document)
    return {
        "collection": summary.collection,
        "event": summary.event,
        "document_id": summary.document_id,
        "matched": summary.matched,
        "sent": summary.sent,
        "failed": summary.failed,
        "skipped": summary.skipped,
        "errored": summary.errored,
    }
