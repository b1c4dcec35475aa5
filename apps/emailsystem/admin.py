"""Admin configuration for the email system."""

from django.contrib import admin

from .models import EmailLogEntry, EmailTemplate, EmailTrigger


@admin.register(EmailTemplate)
class EmailTemplateAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "subject", "updated_at"]
    search_fields = ["id", "name", "subject"]
    readonly_fields = ["created_at", "updated_at"]


@admin.register(EmailTrigger)
class EmailTriggerAdmin(admin.ModelAdmin):
    list_display = [
        "id",
        "name",
        "collection",
        "event",
        "template_id",
        "enabled",
        "send_count",
        "last_triggered",
    ]
    list_filter = ["enabled", "collection", "event", "trigger_type"]
    search_fields = ["id", "name", "template_id"]
    readonly_fields = ["send_count", "last_triggered", "created_at", "updated_at"]


@admin.register(EmailLogEntry)
class EmailLogEntryAdmin(admin.ModelAdmin):
    """Read-only view of the send audit log."""

    list_display = ["sent_at", "recipient", "template_id", "status", "sent_by", "trigger_id"]
    list_filter = ["status", "sent_by", "collection"]
    search_fields = ["recipient", "template_id", "trigger_id", "document_id"]
    date_hierarchy = "sent_at"

    def get_readonly_fields(self, request, obj=None):
        return [f.name for f in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return request.user.is_superuser
