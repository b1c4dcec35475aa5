"""Rider-facing records watched by the email trigger engine."""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.emailsystem.registry import email_trigger_source
from libs.models import BaseModel


@email_trigger_source("registrations", extra_fields=["first_name"])
class Registration(BaseModel):
    """A rider's registration for the tour."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        CANCELLED = "cancelled", _("Cancelled")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="tour_registrations",
        verbose_name=_("User"),
    )
    email = models.EmailField(verbose_name=_("Email"), db_index=True)
    full_name = models.CharField(max_length=200, verbose_name=_("Full name"))
    phone = models.CharField(max_length=50, blank=True, verbose_name=_("Phone"))
    city = models.CharField(max_length=100, blank=True, verbose_name=_("City"))
    state = models.CharField(max_length=100, blank=True, verbose_name=_("State"))
    bike_year = models.CharField(max_length=10, blank=True, verbose_name=_("Bike year"))
    bike_model = models.CharField(max_length=100, blank=True, verbose_name=_("Bike model"))
    has_pillion = models.BooleanField(default=False, verbose_name=_("Riding with pillion"))
    deposit_paid = models.BooleanField(default=False, verbose_name=_("Deposit paid"))
    balance = models.DecimalField(max_digits=10, decimal_places=2, default=0, verbose_name=_("Balance"))
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        verbose_name=_("Status"),
        db_index=True,
    )

    class Meta:
        verbose_name = _("Registration")
        verbose_name_plural = _("Registrations")
        ordering = ["created_at"]

    def __str__(self) -> str:
        return f"{self.full_name} <{self.email}>"

    @property
    def first_name(self) -> str:
        return self.full_name.split(" ")[0] if self.full_name else ""


@email_trigger_source("waitlist")
class WaitlistEntry(BaseModel):
    """A rider waiting for a spot (or registering interest) on a full tour."""

    class ListType(models.TextChoices):
        WAITLIST = "waitlist", _("Waitlist")
        INTEREST = "interest", _("Interest")

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONTACTED = "contacted", _("Contacted")
        CLOSED = "closed", _("Closed")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="tour_waitlist_entries",
        verbose_name=_("User"),
    )
    email = models.EmailField(verbose_name=_("Email"))
    full_name = models.CharField(max_length=200, verbose_name=_("Full name"))
    phone = models.CharField(max_length=50, blank=True, verbose_name=_("Phone"))
    city = models.CharField(max_length=100, blank=True, verbose_name=_("City"))
    state = models.CharField(max_length=100, blank=True, verbose_name=_("State"))
    bike_year = models.CharField(max_length=10, blank=True, verbose_name=_("Bike year"))
    bike_model = models.CharField(max_length=100, blank=True, verbose_name=_("Bike model"))
    event_name = models.CharField(max_length=200, blank=True, verbose_name=_("Event name"))
    list_type = models.CharField(
        max_length=20,
        choices=ListType.choices,
        default=ListType.WAITLIST,
        verbose_name=_("List type"),
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        verbose_name=_("Status"),
    )

    class Meta:
        verbose_name = _("Waitlist entry")
        verbose_name_plural = _("Waitlist entries")
        ordering = ["created_at"]

    def __str__(self) -> str:
        return f"{self.full_name} ({self.list_type})"
