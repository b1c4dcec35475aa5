import json

from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin
from rest_framework import status as http_status
from rest_framework.response import Response

UNWRAPPED_PATH_PREFIXES = ("/docs/", "/schema/", "/admin/", "/health/")


class ApiResponseWrapperMiddleware(MiddlewareMixin):
    """
    Wrap API responses in a ``{"success", "data", "error"}`` envelope.

    Only DRF and JSON responses are wrapped. ``204 No Content`` responses are
    passed through untouched because they must not carry a body.
    """

    def process_response(self, request, response):
        if request.path.startswith(UNWRAPPED_PATH_PREFIXES):
            return response
        if response.status_code == http_status.HTTP_204_NO_CONTENT:
            return response

        if isinstance(response, Response):
            data = response.data if response.data else None
        elif isinstance(response, JsonResponse):
            data = json.loads(response.content)
        else:
            return response

        status = response.status_code
        is_error = getattr(response, "exception", False) or status >= 400
        envelope = {
            "success": not is_error,
            "data": None if is_error else data,
            "error": data if is_error else None,
        }
        return JsonResponse(envelope, status=status)
