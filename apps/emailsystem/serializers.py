"""Serializers for the email system API."""

from rest_framework import serializers

from .constants import ConditionOperator, DocumentEvent, TriggerType
from .models import EmailLogEntry, EmailTemplate, EmailTrigger
from .registry import EmailTriggerSourceRegistry


class TemplateVariableSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    description = serializers.CharField(allow_blank=True, required=False, default="")
    example = serializers.CharField(allow_blank=True, required=False, default="")


class EmailTemplateSerializer(serializers.ModelSerializer):
    variables = serializers.ListField(child=TemplateVariableSerializer(), required=False)

    class Meta:
        model = EmailTemplate
        fields = ["id", "name", "subject", "body", "variables", "created_at", "updated_at"]
        read_only_fields = ["created_at", "updated_at"]

    def validate_id(self, value):
        # Ids are stable references used by triggers and log entries
        if self.instance is not None and value and value != self.instance.pk:
            raise serializers.ValidationError("Template id cannot be changed")
        return value


class ConditionSerializer(serializers.Serializer):
    field = serializers.CharField(max_length=100)
    operator = serializers.ChoiceField(choices=ConditionOperator.choices)
    value = serializers.CharField(allow_blank=True, default="")

    def validate(self, attrs):
        if attrs["operator"] == ConditionOperator.EXISTS and attrs["value"] not in ("true", "false"):
            raise serializers.ValidationError({"value": "The exists operator takes 'true' or 'false'"})
        return attrs


class EmailTriggerSerializer(serializers.ModelSerializer):
    conditions = serializers.ListField(child=ConditionSerializer(), required=False)
    data_mapping = serializers.DictField(child=serializers.CharField(allow_blank=True), required=False)

    class Meta:
        model = EmailTrigger
        fields = [
            "id",
            "name",
            "description",
            "enabled",
            "template_id",
            "trigger_type",
            "collection",
            "event",
            "conditions",
            "recipient_field",
            "data_mapping",
            "last_triggered",
            "send_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["last_triggered", "send_count", "created_at", "updated_at"]

    def validate_id(self, value):
        if self.instance is not None and value and value != self.instance.pk:
            raise serializers.ValidationError("Trigger id cannot be changed")
        return value

    def validate(self, attrs):
        trigger_type = attrs.get("trigger_type", getattr(self.instance, "trigger_type", TriggerType.DOCUMENT))
        if trigger_type == TriggerType.DOCUMENT:
            collection = attrs.get("collection", getattr(self.instance, "collection", ""))
            event = attrs.get("event", getattr(self.instance, "event", ""))
            errors = {}
            if not collection:
                errors["collection"] = "Document triggers need a collection"
            elif collection not in EmailTriggerSourceRegistry.get_all_collections():
                errors["collection"] = f"Unknown collection '{collection}'"
            if event not in DocumentEvent.values:
                errors["event"] = "Document triggers need an event (create, update or delete)"
            if errors:
                raise serializers.ValidationError(errors)
        return attrs


class EmailLogEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = EmailLogEntry
        fields = [
            "id",
            "trigger_id",
            "template_id",
            "template_name",
            "recipient",
            "subject",
            "status",
            "error",
            "sent_at",
            "sent_by",
            "document_id",
            "collection",
        ]
        read_only_fields = fields


class TemplatePreviewRequestSerializer(serializers.Serializer):
    data = serializers.DictField(required=False, default=dict)


class TemplatePreviewResponseSerializer(serializers.Serializer):
    subject = serializers.CharField()
    html = serializers.CharField(help_text="Rendered body wrapped in the email layout")


class SendOneRequestSerializer(serializers.Serializer):
    template_id = serializers.CharField(max_length=100)
    recipient = serializers.EmailField()
    data = serializers.DictField(required=False, default=dict)


class SendOneResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()


class BulkRecipientSerializer(serializers.Serializer):
    email = serializers.EmailField()
    data = serializers.DictField(required=False, default=dict)


class SendBulkRequestSerializer(serializers.Serializer):
    template_id = serializers.CharField(max_length=100)
    recipients = BulkRecipientSerializer(many=True)

    def validate_recipients(self, value):
        if not value:
            raise serializers.ValidationError("At least one recipient is required")
        return value


class SendBulkResponseSerializer(serializers.Serializer):
    sent = serializers.IntegerField()
    failed = serializers.IntegerField()
    errors = serializers.ListField(child=serializers.CharField(), help_text="First 10 per-recipient errors")


class RiderSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    uid = serializers.IntegerField(source="user_id", allow_null=True)
    email = serializers.EmailField()
    full_name = serializers.CharField()
    first_name = serializers.CharField()
    phone = serializers.CharField()
    city = serializers.CharField()
    state = serializers.CharField()
    bike_year = serializers.CharField()
    bike_model = serializers.CharField()
    balance = serializers.DecimalField(max_digits=10, decimal_places=2)
    status = serializers.CharField()
