"""API views for the email system administration surface."""

import logging

from drf_spectacular.utils import OpenApiExample, extend_schema, inline_serializer
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.tours.models import Registration

from .exceptions import EmailGatewayError, TemplateNotFoundError
from .gateway import get_email_gateway
from .models import EmailLogEntry, EmailTemplate, EmailTrigger
from .permissions import IsEmailAdministrator
from .serializers import (
    EmailLogEntrySerializer,
    EmailTemplateSerializer,
    EmailTriggerSerializer,
    RiderSerializer,
    SendBulkRequestSerializer,
    SendBulkResponseSerializer,
    SendOneRequestSerializer,
    SendOneResponseSerializer,
    TemplatePreviewRequestSerializer,
    TemplatePreviewResponseSerializer,
)
from .services import preview_template, send_bulk_templated_email, send_templated_email

logger = logging.getLogger(__name__)

TAG = "Email System"


def gateway_unavailable_response(error: EmailGatewayError) -> Response:
    logger.error(f"Email gateway not available: {error}")
    return Response({"detail": str(error)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)


@extend_schema(tags=[TAG])
class EmailTemplateViewSet(viewsets.ModelViewSet):
    """CRUD for email templates plus rendering previews."""

    queryset = EmailTemplate.objects.all()
    serializer_class = EmailTemplateSerializer
    permission_classes = [IsEmailAdministrator]
    pagination_class = None

    @extend_schema(
        summary="Preview a template",
        description="Render subject and body with the given data without sending anything",
        request=TemplatePreviewRequestSerializer,
        responses={200: TemplatePreviewResponseSerializer},
        examples=[
            OpenApiExample(
                "Preview request",
                value={"data": {"name": "Ana Ruiz"}},
                request_only=True,
            ),
            OpenApiExample(
                "Preview success",
                value={
                    "success": True,
                    "data": {"subject": "Hi Ana Ruiz", "html": "<!DOCTYPE html>..."},
                    "error": None,
                },
                response_only=True,
            ),
        ],
    )
    @action(detail=True, methods=["post"])
    def preview(self, request, pk=None):
        serializer = TemplatePreviewRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            rendered = preview_template(pk, serializer.validated_data["data"])
        except TemplateNotFoundError as e:
            return Response({"detail": str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response({"subject": rendered.subject, "html": rendered.html})


@extend_schema(tags=[TAG])
class EmailTriggerViewSet(viewsets.ModelViewSet):
    """CRUD for email triggers."""

    queryset = EmailTrigger.objects.all()
    serializer_class = EmailTriggerSerializer
    permission_classes = [IsEmailAdministrator]
    pagination_class = None
    filterset_fields = ["collection", "event", "enabled"]

    @extend_schema(
        summary="Toggle a trigger",
        description="Flip the trigger's enabled flag",
        request=None,
        responses={200: EmailTriggerSerializer},
    )
    @action(detail=True, methods=["post"])
    def toggle(self, request, pk=None):
        trigger = self.get_object()
        trigger.enabled = not trigger.enabled
        trigger.save(update_fields=["enabled", "updated_at"])
        logger.info(f"Email trigger {trigger.pk} {'enabled' if trigger.enabled else 'disabled'} by {request.user}")
        return Response(self.get_serializer(trigger).data)


@extend_schema(tags=[TAG])
class EmailLogViewSet(viewsets.ReadOnlyModelViewSet):
    """Read-only access to the send audit log, newest first."""

    queryset = EmailLogEntry.objects.order_by("-sent_at")
    serializer_class = EmailLogEntrySerializer
    permission_classes = [IsEmailAdministrator]
    filterset_fields = ["status", "trigger_id", "template_id", "collection"]


class SendOneView(APIView):
    permission_classes = [IsEmailAdministrator]

    @extend_schema(
        summary="Send a templated email",
        tags=[TAG],
        request=SendOneRequestSerializer,
        responses={200: SendOneResponseSerializer},
        examples=[
            OpenApiExample(
                "Send request",
                value={"template_id": "welcome", "recipient": "rider@example.com", "data": {"name": "Ana"}},
                request_only=True,
            ),
            OpenApiExample(
                "Send failed",
                value={"success": False, "data": None, "error": {"detail": "Template not found: welcome"}},
                response_only=True,
                status_codes=["502"],
            ),
        ],
    )
    def post(self, request):
        serializer = SendOneRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payload = serializer.validated_data

        try:
            gateway = get_email_gateway()
        except EmailGatewayError as e:
            return gateway_unavailable_response(e)

        logger.info(f"Manual send of template {payload['template_id']} to {payload['recipient']}")
        result = send_templated_email(
            payload["template_id"],
            payload["recipient"],
            payload["data"],
            gateway=gateway,
            sent_by=request.user.get_username(),
        )
        if not result.success:
            return Response({"detail": result.error or "Failed to send email"}, status=status.HTTP_502_BAD_GATEWAY)
        return Response({"success": True})


class SendBulkView(APIView):
    permission_classes = [IsEmailAdministrator]

    @extend_schema(
        summary="Send a templated email to many recipients",
        description="Sends sequentially; per-recipient failures are counted and the first 10 errors returned",
        tags=[TAG],
        request=SendBulkRequestSerializer,
        responses={200: SendBulkResponseSerializer},
    )
    def post(self, request):
        serializer = SendBulkRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payload = serializer.validated_data

        try:
            gateway = get_email_gateway()
        except EmailGatewayError as e:
            return gateway_unavailable_response(e)

        logger.info(f"Bulk send of template {payload['template_id']} to {len(payload['recipients'])} recipients")
        result = send_bulk_templated_email(
            payload["template_id"],
            payload["recipients"],
            gateway=gateway,
            sent_by=request.user.get_username(),
        )
        return Response(result.as_dict())


class RiderListView(APIView):
    permission_classes = [IsEmailAdministrator]

    @extend_schema(
        summary="List riders",
        description="Registrations with the fields typically used as manual send data",
        tags=[TAG],
        responses={200: inline_serializer("RiderList", fields={"riders": RiderSerializer(many=True)})},
    )
    def get(self, request):
        riders = Registration.objects.order_by("created_at")
        return Response({"riders": RiderSerializer(riders, many=True).data})
