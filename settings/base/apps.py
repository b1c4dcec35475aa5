DJANGO_APPs = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
]

EXTERNAL_APPS = [
    "django_extensions",
    "django_filters",
    "corsheaders",
    "rest_framework",
    "rest_framework_simplejwt",
    "drf_standardized_errors",
    "drf_spectacular",
    "django_celery_results",
    "health_check",
    "health_check.db",
]

INTERNAL_APPS = [
    "apps.core",
    "apps.tours",
    "apps.emailsystem",
]

INSTALLED_APPS = DJANGO_APPs + EXTERNAL_APPS + INTERNAL_APPS
