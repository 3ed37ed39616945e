"""Authentication helpers that bridge JWT middleware into DRF.

DRF's ``Request.user`` normally relies on its own authentication classes.
Since this project verifies bearer tokens in ``JWTAuthMiddleware``, this
module provides a lightweight authenticator that simply surfaces the caller
already attached to the underlying Django request.
"""

from typing import Any, Optional, Tuple

from django.contrib.auth.models import AnonymousUser
from rest_framework.authentication import BaseAuthentication


class MiddlewareUserAuthentication(BaseAuthentication):
    """Expose ``request._request.user`` (set by middleware) to DRF.

    No credential parsing happens here. If the middleware left an anonymous
    user behind, authentication is skipped and guarded routes answer 401.
    """

    def authenticate(self, request) -> Optional[Tuple[Any, None]]:
        django_request = getattr(request, "_request", None)
        if django_request is None:
            return None

        user = getattr(django_request, "user", None)
        if user is None or isinstance(user, AnonymousUser):
            return None

        if not getattr(user, "is_authenticated", False):
            return None

        return user, None

    def authenticate_header(self, request) -> str:
        """Advertise the bearer scheme so DRF keeps 401 (not 403) for anonymous callers."""
        return 'Bearer realm="api"'


__all__ = ["MiddlewareUserAuthentication"]
