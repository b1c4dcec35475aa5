"""
This configuration file overrides some necessary configs
to allow running unittests.
"""

import warnings

from .base import *  # noqa
from .base.drf import REST_FRAMEWORK

warnings.simplefilter("ignore", category=RuntimeWarning)


ENVIRONMENT = "test"

ALLOWED_HOSTS = ["*"]

INTERNAL_IPS = ["127.0.0.1"]

CELERY_TASK_ALWAYS_EAGER = False

# Use in-memory SQLite database for tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Use local memory cache for tests to avoid Redis dependency
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "test-cache",
    },
}

# Disable throttling in tests by setting very high rates
REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []
REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}

LANGUAGE_CODE = "en"

DEBUG = False

# WARNING: MD5PasswordHasher is ONLY for testing! Never use in production.
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Disable logging in tests to improve performance
LOGGING = {
    "version": 1,
    "disable_existing_loggers": True,
    "handlers": {
        "null": {
            "class": "logging.NullHandler",
        },
    },
    "root": {
        "handlers": ["null"],
    },
}

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

# Tests never reach SendGrid; the Django gateway delivers into mail.outbox
EMAIL_GATEWAY_BACKEND = "apps.emailsystem.gateway.DjangoMailGateway"
SENDGRID_API_KEY = "test-sendgrid-key"
EMAIL_SYSTEM_ADMIN_USERNAME = "tour_admin"
EMAIL_SYSTEM_FROM_EMAIL = "tour@example.com"
EMAIL_SYSTEM_FROM_NAME = "Baja Moto Tour 2026"
EMAIL_SYSTEM_REPLY_TO = "replies@example.com"

STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
}
