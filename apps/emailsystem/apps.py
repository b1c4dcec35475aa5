from django.apps import AppConfig


class EmailSystemConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.emailsystem"
    verbose_name = "Email System"

    def ready(self):
        from django.contrib.auth import get_user_model

        from .registry import EmailTriggerSourceRegistry

        EmailTriggerSourceRegistry.register(
            get_user_model(),
            "users",
            exclude=["password", "last_login"],
        )
