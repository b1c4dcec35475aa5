"""Tests for document-change signal handling."""

from unittest.mock import patch

import pytest
from django.contrib.auth import get_user_model
from django.core import mail

from apps.emailsystem.models import EmailLogEntry, EmailTemplate, EmailTrigger
from apps.tours.models import Registration


@pytest.mark.django_db
class TestDocumentChangeSignals:
    @pytest.fixture
    def mock_task(self):
        with patch("apps.emailsystem.signals.process_document_event_task") as mock_task:
            yield mock_task

    def test_create_enqueues_after_commit(self, mock_task, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            registration = Registration.objects.create(email="ana@example.com", full_name="Ana Ruiz")

        mock_task.delay.assert_not_called()
        for callback in callbacks:
            callback()

        mock_task.delay.assert_called_once()
        collection, event, document_id, document = mock_task.delay.call_args.args
        assert collection == "registrations"
        assert event == "create"
        assert document_id == str(registration.pk)
        assert document["email"] == "ana@example.com"

    def test_update_enqueues_update_event(self, mock_task, django_capture_on_commit_callbacks):
        registration = Registration.objects.create(email="ana@example.com", full_name="Ana Ruiz")
        mock_task.reset_mock()

        with django_capture_on_commit_callbacks(execute=True):
            registration.status = Registration.Status.CONFIRMED
            registration.save()

        collection, event, _document_id, document = mock_task.delay.call_args.args
        assert (collection, event) == ("registrations", "update")
        assert document["status"] == "confirmed"

    def test_delete_enqueues_last_snapshot(self, mock_task, django_capture_on_commit_callbacks):
        registration = Registration.objects.create(email="ana@example.com", full_name="Ana Ruiz")
        registration_id = registration.pk

        with django_capture_on_commit_callbacks(execute=True):
            registration.delete()

        collection, event, document_id, document = mock_task.delay.call_args.args
        assert (collection, event) == ("registrations", "delete")
        assert document_id == str(registration_id)
        assert document["full_name"] == "Ana Ruiz"

    def test_saves_touching_only_hidden_fields_are_ignored(self, mock_task, django_capture_on_commit_callbacks):
        user = get_user_model().objects.create_user(username="ana", email="ana@example.com", password="secret-pass")
        mock_task.reset_mock()

        with django_capture_on_commit_callbacks(execute=True):
            user.save(update_fields=["last_login"])

        mock_task.delay.assert_not_called()

    def test_unregistered_models_are_ignored(self, mock_task, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            EmailTemplate.objects.create(id="welcome", name="Welcome", subject="Hi", body="<p>Hi</p>")

        mock_task.delay.assert_not_called()


@pytest.mark.django_db
class TestDocumentChangeEndToEnd:
    def test_registration_sends_welcome_email(self, settings, django_capture_on_commit_callbacks):
        settings.CELERY_TASK_ALWAYS_EAGER = True
        EmailTemplate.objects.create(
            id="welcome",
            name="Welcome",
            subject="Welcome aboard, {{name}}",
            body="<p>Thanks for registering your {{bike}}.</p>",
        )
        trigger = EmailTrigger.objects.create(
            name="Welcome on registration",
            template_id="welcome",
            collection="registrations",
            event="create",
            data_mapping={"name": "first_name", "bike": "bike_model"},
        )

        with django_capture_on_commit_callbacks(execute=True):
            Registration.objects.create(email="ana@example.com", full_name="Ana Ruiz", bike_model="KTM 690")

        assert len(mail.outbox) == 1
        assert mail.outbox[0].subject == "Welcome aboard, Ana"
        assert mail.outbox[0].to == ["ana@example.com"]
        entry = EmailLogEntry.objects.get()
        assert entry.trigger_id == trigger.pk
        trigger.refresh_from_db()
        assert trigger.send_count == 1
