"""
Global pytest configuration for test database toggling.

Usage:
- Default (from pyproject addopts): reuse test DB across runs for speed.
- Override quickly via CLI:
    pytest --db-mode=recreate   # drop and re-create test DB
    pytest --db-mode=flush      # keep schema, flush data at session start
    pytest --db-mode=reuse      # reuse existing test DB (default)
- Or via env var (takes effect if CLI option omitted):
    PYTEST_DB_MODE=recreate pytest

Modes:
- reuse:     pytest-django --reuse-db (fastest, no deletion)
- recreate:  force re-create test DB (--create-db, disable reuse)
- flush:     reuse schema but flush all data once at session start
"""

import os
import secrets
from unittest.mock import MagicMock

import pytest
from django.core.management import call_command


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--db-mode",
        action="store",
        default=os.getenv("PYTEST_DB_MODE", "reuse"),
        choices=["reuse", "recreate", "flush"],
        help=(
            "Test DB mode: 'reuse' (default), 'recreate' (drop & re-create), or "
            "'flush' (keep schema, clear data at session start)."
        ),
    )


def pytest_configure(config: pytest.Config) -> None:
    mode = config.getoption("--db-mode")

    if mode == "recreate":
        config.option.reuse_db = False
        config.option.create_db = True
    elif mode in ("reuse", "flush"):
        config.option.reuse_db = True
        config.option.create_db = False


@pytest.fixture(scope="session", autouse=True)
def _maybe_flush_db(request: pytest.FixtureRequest, django_db_blocker) -> None:  # type: ignore[no-redef]
    """Flush DB once at session start if --db-mode=flush."""
    mode = request.config.getoption("--db-mode")
    if mode != "flush":
        return

    with django_db_blocker.unblock():
        call_command("flush", verbosity=0, interactive=False)


@pytest.fixture(autouse=True)
def mock_celery_tasks(monkeypatch, settings):
    """
    Mock Celery task execution to prevent broker connection attempts during tests.

    With CELERY_TASK_ALWAYS_EAGER enabled, .delay() and .apply_async() run the task
    synchronously via Task.apply(). Otherwise they are no-ops returning a MagicMock,
    so saving a registered model does not run the trigger engine unless a test
    opts in.

    Tests that need to verify task calls should use @patch at the test level.
    """

    def mock_delay(self, *args, **kwargs):
        if getattr(settings, "CELERY_TASK_ALWAYS_EAGER", False):
            return self.apply(args=args, kwargs=kwargs)

        return MagicMock()

    def mock_apply_async(self, *args, **kwargs):
        if getattr(settings, "CELERY_TASK_ALWAYS_EAGER", False):
            task_args = kwargs.get("args", args)
            task_kwargs = kwargs.get("kwargs", {})
            return self.apply(args=task_args, kwargs=task_kwargs)

        return MagicMock()

    monkeypatch.setattr("celery.app.task.Task.delay", mock_delay)
    monkeypatch.setattr("celery.app.task.Task.apply_async", mock_apply_async)


@pytest.fixture(autouse=True)
def disable_throttling(settings):
    """Disable DRF throttling in all tests to avoid cache/Redis dependency."""
    settings.CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
            "LOCATION": "test-cache-fixture",
        },
    }

    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}


@pytest.fixture
def superuser(db):
    """Superuser used for auto-authentication in API tests."""
    from django.contrib.auth import get_user_model

    return get_user_model().objects.create_superuser(
        username="test_superuser",
        email="superuser@test.com",
        password=secrets.token_urlsafe(16),
    )


@pytest.fixture
def email_admin(db, settings):
    """The configured email administrator account (not a superuser)."""
    from django.contrib.auth import get_user_model

    return get_user_model().objects.create_user(
        username=settings.EMAIL_SYSTEM_ADMIN_USERNAME,
        email="admin@example.com",
        password=secrets.token_urlsafe(16),
    )


@pytest.fixture
def api_client(request, superuser):
    """
    Fixture that provides a DRF APIClient with auto-authentication.

    By default, the client is authenticated as a superuser. Tests that need to
    verify permission behavior should be marked with @pytest.mark.rbp to receive
    an unauthenticated client instead.
    """
    from rest_framework.test import APIClient

    client = APIClient()

    marker_names = {marker.name for marker in request.node.iter_markers()}
    if "rbp" not in marker_names:
        client.force_authenticate(user=superuser)

    return client


@pytest.fixture
def sendgrid_gateway():
    """SendGrid gateway with test credentials; tests patch requests.post."""
    from apps.emailsystem.gateway import Sender, SendGridGateway

    return SendGridGateway(
        api_key="test-sendgrid-key",
        sender=Sender(email="tour@example.com", name="Baja Moto Tour 2026", reply_to="replies@example.com"),
        timeout=5,
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """
    Auto-categorize tests as unit or integration based on patterns.

    Tests can override these auto-markers by explicitly using decorators:
    @pytest.mark.integration, @pytest.mark.unit, @pytest.mark.slow
    """
    for item in items:
        marker_names = {marker.name for marker in item.iter_markers()}

        has_test_type = "integration" in marker_names or "unit" in marker_names
        if not has_test_type:
            is_integration = (
                "test_api" in item.nodeid
                or "API" in str(item.cls)
                or "ViewSet" in str(item.cls)
            )

            if is_integration:
                item.add_marker(pytest.mark.integration)
            else:
                item.add_marker(pytest.mark.unit)
