from typing import Any

from .base import LOG_LEVEL

LOGGING: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "console": {
            "format": 'timestamp="%(asctime)s" logger="%(name)s" level="%(levelname)s" msg="%(message)s"',
        },
        "default": {
            "format": 'timestamp="%(asctime)s" logger="%(name)s" level="%(levelname)s" file="%(filename)s" line=%(lineno)d msg="%(message)s"'
        },
    },
    "handlers": {
        "console": {
            "level": "DEBUG",
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        # Trigger dispatch decisions are logged at INFO so skipped triggers stay traceable
        "apps.emailsystem": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}
