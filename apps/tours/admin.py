from django.contrib import admin

from .models import Registration, WaitlistEntry


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ["full_name", "email", "bike_model", "status", "deposit_paid", "balance", "created_at"]
    list_filter = ["status", "deposit_paid"]
    search_fields = ["full_name", "email", "phone"]


@admin.register(WaitlistEntry)
class WaitlistEntryAdmin(admin.ModelAdmin):
    list_display = ["full_name", "email", "list_type", "status", "created_at"]
    list_filter = ["list_type", "status"]
    search_fields = ["full_name", "email"]
