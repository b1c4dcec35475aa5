"""
This configuration file overrides some necessary configs
for the shared develop environment.
"""

from decouple import Csv

from .base import *  # noqa

ALLOWED_HOSTS = ["*"]

# Cache settings
CACHE_PREFIX = config("CACHE_PREFIX", default="")  # noqa
CACHE_TIMEOUT = config(  # noqa
    "CACHE_TIMEOUT",
    default=24 * 60 * 60 * 30,  # timeout after 30 days
    cast=int,
)
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": CACHE_URL,  # noqa
        "KEY_PREFIX": CACHE_PREFIX + "default",
        "TIMEOUT": CACHE_TIMEOUT,
    },
}

# CSRF settings
CSRF_TRUSTED_ORIGINS = config("CSRF_TRUSTED_ORIGINS", default="", cast=Csv())  # noqa
CORS_ALLOWED_ORIGINS = config("CORS_ALLOWED_ORIGINS", default="", cast=Csv())  # noqa
