from django.core.management.base import BaseCommand, CommandError

from apps.emailsystem.constants import DocumentEvent
from apps.emailsystem.dispatcher import TriggerDispatcher
from apps.emailsystem.exceptions import EmailGatewayError
from apps.emailsystem.gateway import get_email_gateway
from apps.emailsystem.registry import EmailTriggerSourceRegistry, serialize_document


class Command(BaseCommand):
    help = "Run the email triggers for a document-change event synchronously (e.g. to replay a missed event)"

    def add_arguments(self, parser):
        parser.add_argument("collection", type=str, help="Collection name, e.g. registrations")
        parser.add_argument("event", type=str, choices=DocumentEvent.values, help="Document event")
        parser.add_argument("pk", type=str, help="Primary key of the document")

    def handle(self, *args, **options):
        collection = options["collection"]
        event = options["event"]
        pk = options["pk"]

        model_class = EmailTriggerSourceRegistry.get_model(collection)
        if model_class is None:
            available = ", ".join(EmailTriggerSourceRegistry.get_all_collections())
            raise CommandError(f"Unknown collection '{collection}'. Available: {available}")

        try:
            instance = model_class.objects.get(pk=pk)
        except (model_class.DoesNotExist, ValueError) as e:
            raise CommandError(f"{collection}/{pk} not found") from e

        try:
            gateway = get_email_gateway()
        except EmailGatewayError as e:
            raise CommandError(f"Email gateway not available: {e}") from e

        summary = TriggerDispatcher(gateway=gateway).handle(collection, event, str(instance.pk), serialize_document(instance))

        self.stdout.write(
            self.style.SUCCESS(
                f"{collection}/{summary.document_id} ({event}): matched={summary.matched} sent={summary.sent} "
                f"failed={summary.failed} skipped={summary.skipped} errored={summary.errored}"
            )
        )
