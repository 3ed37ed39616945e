"""Middleware to authenticate requests via a JWT bearer token."""

from django.contrib.auth.models import AnonymousUser
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed

from authentication.services import AuthService, TokenService
from core.exceptions import UNAUTHORIZED_MESSAGE


class JWTAuthMiddleware(MiddlewareMixin):
    """Decode the access JWT and attach the resolved caller as request.user."""

    auth_service = AuthService()

    def process_request(self, request):  # type: ignore[override]
        """Authenticate request using Bearer token if present."""
        auth_header = request.META.get("HTTP_AUTHORIZATION", "")
        if not auth_header or not auth_header.startswith("Bearer "):
            request.user = AnonymousUser()
            return None

        token = auth_header.split(" ", 1)[1]

        try:
            payload = TokenService.decode_token(token)
            request.user = self.auth_service.validate_user(payload)
        except AuthenticationFailed:
            return _unauthorized()
        return None


def _unauthorized() -> JsonResponse:
    return JsonResponse(
        {"data": None, "errors": [UNAUTHORIZED_MESSAGE]},
        status=status.HTTP_401_UNAUTHORIZED,
    )


__all__ = ["JWTAuthMiddleware"]
