"""
This configuration file overrides some necessary configs
to easily develop the app.
"""

from .base import *  # noqa

ALLOWED_HOSTS = ["*"]

INTERNAL_IPS = ["127.0.0.1"]

DEBUG = True

# CELERY_TASK_ALWAYS_EAGER = True

# Send trigger emails through the Django console backend instead of SendGrid
EMAIL_GATEWAY_BACKEND = config(  # noqa
    "EMAIL_GATEWAY_BACKEND", default="apps.emailsystem.gateway.DjangoMailGateway"
)
EMAIL_BACKEND = config(  # noqa
    "EMAIL_BACKEND", default="django.core.mail.backends.console.EmailBackend"
)
