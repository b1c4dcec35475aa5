import logging

import sentry_sdk
from drf_standardized_errors.handler import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


def exception_handler(exc, context):
    response = drf_exception_handler(exc, context)

    # Not an API error: re-raise so Django and Sentry see the original exception
    if response is None:
        sentry_sdk.capture_exception(exc)
        raise exc

    if response.status_code >= 500:
        view = context.get("view")
        logger.error(f"Unhandled API error in {view.__class__.__name__ if view else 'unknown view'}: {exc}")
        sentry_sdk.capture_exception(exc)

    return response
