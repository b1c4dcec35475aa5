from .base import config

# Django email backend, used by the DjangoMailGateway and by password reset mails
EMAIL_BACKEND = config("EMAIL_BACKEND", default="django.core.mail.backends.console.EmailBackend")
DEFAULT_FROM_EMAIL = config("DEFAULT_FROM_EMAIL", default="noreply@bajamototour.com")

# Outbound gateway used by the email trigger engine and the admin send endpoints
EMAIL_GATEWAY_BACKEND = config(
    "EMAIL_GATEWAY_BACKEND",
    default="apps.emailsystem.gateway.SendGridGateway",
)
SENDGRID_API_KEY = config("SENDGRID_API_KEY", default="")
SENDGRID_API_URL = config("SENDGRID_API_URL", default="https://api.sendgrid.com/v3/mail/send")
EMAIL_GATEWAY_TIMEOUT = config("EMAIL_GATEWAY_TIMEOUT", default=10.0, cast=float)

EMAIL_SYSTEM_FROM_EMAIL = config("EMAIL_SYSTEM_FROM_EMAIL", default="tour@bajamototour.com")
EMAIL_SYSTEM_FROM_NAME = config("EMAIL_SYSTEM_FROM_NAME", default="Baja Moto Tour 2026")
EMAIL_SYSTEM_REPLY_TO = config("EMAIL_SYSTEM_REPLY_TO", default="")

# Header/footer text of the HTML layout wrapped around every template body
EMAIL_LAYOUT_TITLE = config("EMAIL_LAYOUT_TITLE", default="Baja Moto Tour 2026")
EMAIL_LAYOUT_SUBTITLE = config("EMAIL_LAYOUT_SUBTITLE", default="March 19-27, 2026")

# Hard cap on triggers processed for a single document-change event
EMAIL_TRIGGER_MAX_PER_EVENT = config("EMAIL_TRIGGER_MAX_PER_EVENT", default=50, cast=int)
EMAIL_TRIGGER_TASK_SOFT_TIME_LIMIT = config("EMAIL_TRIGGER_TASK_SOFT_TIME_LIMIT", default=240, cast=int)

# The single account allowed to use the email administration API
EMAIL_SYSTEM_ADMIN_USERNAME = config("EMAIL_SYSTEM_ADMIN_USERNAME", default="admin")
