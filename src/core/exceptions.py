"""Custom exception handling to enforce the API error envelope."""

from typing import Any

from django.conf import settings
from django.db import DatabaseError, IntegrityError
from rest_framework import status
from rest_framework.exceptions import APIException, AuthenticationFailed, NotAuthenticated
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

UNAUTHORIZED_MESSAGE = "Authentication credentials were not provided or are invalid."


class Conflict(APIException):
    """Raised when a write would violate a uniqueness rule (e.g. email in use)."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists."
    default_code = "conflict"


def _normalize_errors(payload: Any) -> list[Any]:
    """Convert DRF's response.data into a list for the envelope."""

    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and "detail" in payload:
        # Common DRF pattern: {"detail": "..."}
        return [payload["detail"]]
    return [payload]


def custom_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """Wrap DRF errors in `{ "data": null, "errors": [...] }` shape.

    - Uses DRF's default handler to produce the base response.
    - Collapses every 401 into one generic message so failed logins never
      reveal whether the email or the password was wrong.
    - Optionally exposes more detailed auth errors when DEBUG_AUTH_ERRORS is enabled.
    """

    # Unique index violations that no service caught are still conflicts.
    if isinstance(exc, IntegrityError):
        exc = Conflict()

    # Treat database errors as a temporary service outage and still respect the
    # global envelope format instead of returning Django's HTML 500 page.
    if isinstance(exc, DatabaseError):
        return Response(
            {"data": None, "errors": ["Service temporarily unavailable."]},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    response = drf_exception_handler(exc, context)

    if response is None:
        return response

    if isinstance(exc, (AuthenticationFailed, NotAuthenticated)):
        response.status_code = status.HTTP_401_UNAUTHORIZED

    if response.status_code >= 400:
        if response.status_code == status.HTTP_401_UNAUTHORIZED and not getattr(
            settings, "DEBUG_AUTH_ERRORS", False
        ):
            errors = [UNAUTHORIZED_MESSAGE]
        else:
            errors = _normalize_errors(response.data)

        response.data = {"data": None, "errors": errors}

    return response


__all__ = ["Conflict", "UNAUTHORIZED_MESSAGE", "custom_exception_handler"]
