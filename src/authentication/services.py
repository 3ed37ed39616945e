"""Session tokens and account flows (register, login, caller resolution)."""

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any

import bcrypt
import jwt
from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from rest_framework.exceptions import AuthenticationFailed

from access_control.models import Permission
from core.exceptions import Conflict
from .serializers import UserDetailSerializer

logger = logging.getLogger(__name__)

User = get_user_model()

INVALID_CREDENTIALS = "Invalid credentials"
EMAIL_IN_USE = "Email already in use"


class TokenService:
    """Issue and decode signed session tokens."""

    @classmethod
    def generate_token(cls, user) -> str:
        """Sign a token carrying the user's id and email."""

        now = datetime.now(timezone.utc)
        payload = cls._build_payload(user, now, timedelta(minutes=settings.ACCESS_TOKEN_TTL_MINUTES))
        return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    @staticmethod
    def _build_payload(user, issued_at: datetime, ttl: timedelta) -> dict[str, Any]:
        return {
            # PyJWT requires "sub" to be a string.
            "sub": str(user.id),
            "email": user.email,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + ttl).timestamp()),
        }

    @classmethod
    def decode_token(cls, token: str) -> dict[str, Any]:
        """Verify signature and expiry, returning the payload."""

        try:
            return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationFailed("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationFailed("Invalid token") from exc


class AuthService:
    """Registration, login, and token subject resolution."""

    def register(self, name: str, email: str, password: str) -> dict[str, Any]:
        """Create an account and return its public profile with a session token.

        The email check runs before the insert; a concurrent duplicate that
        slips past it is rejected by the unique index and reported the same way.
        """
        email = User.objects.normalize_email(email)
        if User.objects.filter(email=email).exists():
            raise Conflict(EMAIL_IN_USE)

        try:
            with transaction.atomic():
                user = User.objects.create_user(email=email, password=password, name=name)
                self._grant_default_permissions(user)
        except IntegrityError as exc:
            raise Conflict(EMAIL_IN_USE) from exc

        logger.info("Registered user %s", user.pk)
        return self._session(user)

    def login(self, email: str, password: str) -> dict[str, Any]:
        """Check credentials; unknown email and wrong password fail identically."""
        user = User.objects.filter(email=User.objects.normalize_email(email)).first()
        if user is None:
            # Unknown emails still pay for one bcrypt comparison.
            bcrypt.checkpw(password.encode(), self._dummy_hash(settings.BCRYPT_ROUNDS))
            raise AuthenticationFailed(INVALID_CREDENTIALS)
        if not user.check_password(password):
            raise AuthenticationFailed(INVALID_CREDENTIALS)
        return self._session(user)

    @staticmethod
    @lru_cache(maxsize=None)
    def _dummy_hash(rounds: int) -> bytes:
        return bcrypt.hashpw(b"unused-password", bcrypt.gensalt(rounds=rounds))

    @staticmethod
    def validate_user(payload: dict[str, Any]):
        """Resolve the token subject to a live user."""
        subject = payload.get("sub")
        try:
            user_id = int(subject)
        except (TypeError, ValueError):
            raise AuthenticationFailed("Invalid token")

        user = User.objects.filter(pk=user_id).first()
        if user is None:
            raise AuthenticationFailed("Invalid token")
        return user

    @staticmethod
    def _grant_default_permissions(user) -> None:
        names = settings.DEFAULT_USER_PERMISSIONS
        if not names:
            return
        permissions = list(Permission.objects.filter(name__in=names))
        missing = set(names) - {permission.name for permission in permissions}
        if missing:
            logger.warning("Default permissions not in catalog: %s", ", ".join(sorted(missing)))
        user.permissions.add(*permissions)

    @staticmethod
    def _session(user) -> dict[str, Any]:
        return {"user": UserDetailSerializer(user).data, "token": TokenService.generate_token(user)}


__all__ = ["AuthService", "TokenService", "INVALID_CREDENTIALS", "EMAIL_IN_USE"]
