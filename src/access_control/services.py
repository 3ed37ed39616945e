"""Permission catalog and user-permission association services."""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework.exceptions import NotFound

from .models import Permission, PermissionName

logger = logging.getLogger(__name__)


class PermissionService:
    """Read and seed the permission catalog."""

    def create_permission(self, name: str, description: str = "") -> Permission:
        return Permission.objects.create(name=name, description=description)

    def find_all(self) -> list[Permission]:
        return list(Permission.objects.all())

    def find_by_name(self, name: str) -> Permission | None:
        return Permission.objects.filter(name=name).first()

    def seed_permissions(self) -> list[Permission]:
        """Insert each canonical permission whose name is not yet in the catalog.

        ``get_or_create`` falls back to a lookup when a concurrent insert wins
        the unique index, so repeated or overlapping runs never duplicate.
        """
        seeded = []
        for choice in PermissionName:
            permission, created = Permission.objects.get_or_create(
                name=choice.value,
                defaults={"description": choice.label},
            )
            if created:
                logger.info("Permission '%s' created", permission.name)
            else:
                logger.debug("Permission '%s' already exists", permission.name)
            seeded.append(permission)
        return seeded


class UserPermissionService:
    """Grant, revoke and list permissions held by users."""

    ROOT_USER_NAME = "Root Admin"

    def assign_permission_to_user(self, user_id: int, permission_name: str) -> None:
        """Grant a permission; granting one the user already holds is a no-op."""
        user = self._get_user(user_id)
        permission = self._get_permission(permission_name)
        user.permissions.add(permission)

    def revoke_permission_from_user(self, user_id: int, permission_name: str) -> None:
        user = self._get_user(user_id)
        permission = self._get_permission(permission_name)
        user.permissions.remove(permission)

    def get_user_permissions(self, user_id: int) -> list[str]:
        """Permission names held by the user, or an empty list for unknown ids."""
        user = get_user_model().objects.prefetch_related("permissions").filter(pk=user_id).first()
        if user is None:
            return []
        return sorted(user.permission_names())

    def create_root_user(self):
        """Ensure the reserved root account exists holding the whole catalog.

        Returns the created user, or ``None`` when the account was already there.
        """
        User = get_user_model()
        # Stored emails are normalized, so the lookup must be too.
        email = User.objects.normalize_email(settings.ROOT_USER_EMAIL)
        if User.objects.filter(email=email).exists():
            return None

        with transaction.atomic():
            root = User.objects.create_user(
                email=email,
                password=settings.ROOT_USER_PASSWORD,
                name=self.ROOT_USER_NAME,
            )
            root.permissions.set(Permission.objects.all())
        logger.info("Root user %s created", email)
        return root

    @staticmethod
    def _get_user(user_id: int):
        user = get_user_model().objects.filter(pk=user_id).first()
        if user is None:
            raise NotFound("User not found")
        return user

    @staticmethod
    def _get_permission(name: str) -> Permission:
        permission = Permission.objects.filter(name=name).first()
        if permission is None:
            raise NotFound("Permission not found")
        return permission


__all__ = ["PermissionService", "UserPermissionService"]
