"""Shared helpers for tests (permission seeding, user creation, API clients)."""

from __future__ import annotations

from typing import Iterable

from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from access_control.models import Permission
from access_control.services import PermissionService
from authentication.services import TokenService

User = get_user_model()


def seed_permissions() -> dict[str, Permission]:
    """Create the canonical permissions and return a name->Permission map.

    Delegates to the same service used at process start to keep catalog
    setup logic in a single place.
    """

    return {permission.name: permission for permission in PermissionService().seed_permissions()}


def create_user(email: str, password: str, permissions: Iterable[str] = (), **extra):
    """Create a user with a bcrypt-hashed password and the named permissions."""

    extra.setdefault("name", email.split("@")[0])
    user = User.objects.create_user(email=email, password=password, **extra)
    if permissions:
        user.permissions.set(Permission.objects.filter(name__in=list(permissions)))
    return user


def auth_client(user) -> APIClient:
    """Return an APIClient authenticated with a fresh session token."""

    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {TokenService.generate_token(user)}")
    return client
