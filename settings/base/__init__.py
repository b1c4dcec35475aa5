# ruff: noqa

from .base import *
from .apps import *
from .cache import *
from .celery import *
from .database import *
from .drf import *
from .email import *
from .internationalization import *
from .logging import *
from .middleware import *
from .password import *
from .sentry import *
from .templates import *
from .static import *
