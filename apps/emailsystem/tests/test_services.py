"""Tests for template send services."""

from unittest.mock import MagicMock, patch

from celery.exceptions import SoftTimeLimitExceeded
from django.core import mail
from django.test import TestCase

from apps.emailsystem.constants import FAILED_TO_RENDER_SUBJECT, SendStatus
from apps.emailsystem.exceptions import EmailGatewayError, TemplateNotFoundError
from apps.emailsystem.gateway import DjangoMailGateway, EmailGateway, Sender
from apps.emailsystem.models import EmailLogEntry, EmailTemplate
from apps.emailsystem.services import (
    preview_template,
    send_bulk_templated_email,
    send_templated_email,
    write_log_entry,
)


class SendTemplatedEmailTestCase(TestCase):
    def setUp(self):
        self.template = EmailTemplate.objects.create(
            id="welcome",
            name="Welcome",
            subject="Welcome {{name}}",
            body="<p>Hi {{name}}, see you in {{city}}</p>",
        )
        self.gateway = MagicMock(spec=EmailGateway)

    def test_sends_rendered_email_and_logs_success(self):
        result = send_templated_email(
            "welcome", "ana@example.com", {"name": "Ana"}, gateway=self.gateway, sent_by="tour_admin"
        )

        self.assertTrue(result.success)
        self.assertIsNone(result.error)
        recipient, subject, html = self.gateway.send.call_args.args
        self.assertEqual(recipient, "ana@example.com")
        self.assertEqual(subject, "Welcome Ana")
        self.assertIn("<p>Hi Ana, see you in {{city}}</p>", html)

        entry = EmailLogEntry.objects.get()
        self.assertEqual(entry.status, SendStatus.SENT)
        self.assertEqual(entry.template_id, "welcome")
        self.assertEqual(entry.template_name, "Welcome")
        self.assertEqual(entry.subject, "Welcome Ana")
        self.assertEqual(entry.sent_by, "tour_admin")
        self.assertEqual(entry.error, "")
        self.assertIsNone(entry.trigger_id)

    def test_records_trigger_context(self):
        send_templated_email(
            "welcome",
            "ana@example.com",
            {"name": "Ana"},
            gateway=self.gateway,
            sent_by="system-trigger",
            trigger_id="trigger-1",
            document_id="42",
            collection="registrations",
        )

        entry = EmailLogEntry.objects.get()
        self.assertEqual(entry.trigger_id, "trigger-1")
        self.assertEqual(entry.document_id, "42")
        self.assertEqual(entry.collection, "registrations")

    def test_missing_template_fails_without_calling_gateway(self):
        result = send_templated_email("missing", "ana@example.com", {}, gateway=self.gateway, sent_by="tour_admin")

        self.assertFalse(result.success)
        self.assertEqual(result.error, "Template not found: missing")
        self.gateway.send.assert_not_called()

        entry = EmailLogEntry.objects.get()
        self.assertEqual(entry.status, SendStatus.FAILED)
        self.assertEqual(entry.subject, FAILED_TO_RENDER_SUBJECT)
        self.assertEqual(entry.template_name, "missing")
        self.assertEqual(entry.error, "Template not found: missing")

    def test_gateway_failure_is_logged_with_rendered_subject(self):
        self.gateway.send.side_effect = EmailGatewayError("SendGrid returned status=500", status_code=500)

        result = send_templated_email(
            "welcome", "ana@example.com", {"name": "Ana"}, gateway=self.gateway, sent_by="tour_admin"
        )

        self.assertFalse(result.success)
        self.assertIn("status=500", result.error)
        entry = EmailLogEntry.objects.get()
        self.assertEqual(entry.status, SendStatus.FAILED)
        self.assertEqual(entry.subject, "Welcome Ana")
        self.assertIn("status=500", entry.error)

    @patch("apps.emailsystem.services.sentry_sdk.capture_exception")
    def test_unexpected_error_is_reported_and_logged(self, mock_capture):
        self.gateway.send.side_effect = RuntimeError("boom")

        result = send_templated_email("welcome", "ana@example.com", {}, gateway=self.gateway, sent_by="tour_admin")

        self.assertFalse(result.success)
        self.assertEqual(result.error, "boom")
        mock_capture.assert_called_once()
        self.assertEqual(EmailLogEntry.objects.count(), 1)

    def test_time_limit_is_reraised_without_log(self):
        self.gateway.send.side_effect = SoftTimeLimitExceeded()

        with self.assertRaises(SoftTimeLimitExceeded):
            send_templated_email("welcome", "ana@example.com", {}, gateway=self.gateway, sent_by="tour_admin")

        self.assertEqual(EmailLogEntry.objects.count(), 0)

    @patch("apps.emailsystem.services.sentry_sdk.capture_exception")
    def test_expected_failures_are_not_reported_to_sentry(self, mock_capture):
        send_templated_email("missing", "ana@example.com", {}, gateway=self.gateway, sent_by="tour_admin")

        mock_capture.assert_not_called()

    @patch("apps.emailsystem.services.sentry_sdk.capture_exception")
    @patch("apps.emailsystem.services.EmailLogEntry.objects.create")
    def test_log_write_failure_does_not_change_outcome(self, mock_create, mock_capture):
        mock_create.side_effect = RuntimeError("database unavailable")

        result = send_templated_email(
            "welcome", "ana@example.com", {"name": "Ana"}, gateway=self.gateway, sent_by="tour_admin"
        )

        self.assertTrue(result.success)
        self.gateway.send.assert_called_once()
        mock_capture.assert_called_once()

    def test_long_subject_is_truncated_in_log(self):
        EmailTemplate.objects.filter(pk="welcome").update(subject="{{text}}")

        send_templated_email(
            "welcome", "ana@example.com", {"text": "x" * 600}, gateway=self.gateway, sent_by="tour_admin"
        )

        self.assertEqual(len(EmailLogEntry.objects.get().subject), 500)

    def test_delivers_through_django_mail_gateway(self):
        gateway = DjangoMailGateway(sender=Sender(email="tour@example.com", name="Baja Moto Tour 2026"))

        result = send_templated_email("welcome", "ana@example.com", {"name": "Ana"}, gateway=gateway, sent_by="admin")

        self.assertTrue(result.success)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].subject, "Welcome Ana")


class WriteLogEntryTestCase(TestCase):
    @patch("apps.emailsystem.services.sentry_sdk.capture_exception")
    def test_returns_none_when_write_fails(self, mock_capture):
        entry = write_log_entry(recipient="ana@example.com", unknown_field="x")

        self.assertIsNone(entry)
        mock_capture.assert_called_once()


class SendBulkTemplatedEmailTestCase(TestCase):
    def setUp(self):
        EmailTemplate.objects.create(id="reminder", name="Reminder", subject="Hi {{name}}", body="<p>Balance</p>")
        self.gateway = MagicMock(spec=EmailGateway)

    def test_counts_sent_and_failed(self):
        def send(recipient, subject, html):
            if recipient.startswith("bad"):
                raise EmailGatewayError("rejected")

        self.gateway.send.side_effect = send
        recipients = [
            {"email": "ana@example.com", "data": {"name": "Ana"}},
            {"email": "bad@example.com", "data": {"name": "Bad"}},
            {"email": "luis@example.com"},
        ]

        result = send_bulk_templated_email("reminder", recipients, gateway=self.gateway, sent_by="tour_admin")

        self.assertEqual(result.sent, 2)
        self.assertEqual(result.failed, 1)
        self.assertEqual(result.errors, ["bad@example.com: rejected"])
        self.assertEqual(EmailLogEntry.objects.count(), 3)

    def test_error_list_is_capped(self):
        self.gateway.send.side_effect = EmailGatewayError("rejected")
        recipients = [{"email": f"rider{i}@example.com"} for i in range(12)]

        result = send_bulk_templated_email("reminder", recipients, gateway=self.gateway, sent_by="tour_admin")

        self.assertEqual(result.failed, 12)
        self.assertEqual(len(result.as_dict()["errors"]), 10)


class PreviewTemplateTestCase(TestCase):
    def test_renders_without_sending_or_logging(self):
        EmailTemplate.objects.create(id="welcome", name="Welcome", subject="Hi {{name}}", body="<p>{{name}}</p>")

        rendered = preview_template("welcome", {"name": "Ana"})

        self.assertEqual(rendered.subject, "Hi Ana")
        self.assertIn("<p>Ana</p>", rendered.html)
        self.assertEqual(EmailLogEntry.objects.count(), 0)

    def test_missing_template_raises(self):
        with self.assertRaises(TemplateNotFoundError):
            preview_template("missing", {})
