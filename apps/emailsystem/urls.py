"""URL patterns for the email system API."""

from django.urls import path
from rest_framework.routers import DefaultRouter

from . import views

app_name = "emailsystem"

router = DefaultRouter()
router.register(r"templates", views.EmailTemplateViewSet, basename="email-template")
router.register(r"triggers", views.EmailTriggerViewSet, basename="email-trigger")
router.register(r"logs", views.EmailLogViewSet, basename="email-log")

urlpatterns = [
    path("send/", views.SendOneView.as_view(), name="send-one"),
    path("send-bulk/", views.SendBulkView.as_view(), name="send-bulk"),
    path("riders/", views.RiderListView.as_view(), name="riders"),
] + router.urls
