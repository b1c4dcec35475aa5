"""Permissions for the email system administration API."""

from django.conf import settings
from django.utils.translation import gettext as _
from rest_framework.exceptions import NotAuthenticated, PermissionDenied
from rest_framework.permissions import BasePermission


class IsEmailAdministrator(BasePermission):
    """Permission to manage templates, triggers and manual sends.

    Allows:
    - The account named by EMAIL_SYSTEM_ADMIN_USERNAME
    - Superusers
    """

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            raise NotAuthenticated(_("Must be logged in."))

        if request.user.is_superuser:
            return True

        if request.user.get_username() == settings.EMAIL_SYSTEM_ADMIN_USERNAME:
            return True

        raise PermissionDenied(_("Not authorized."))
