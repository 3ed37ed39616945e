"""Custom User model using bcrypt-hashed passwords and permission linkage.

Note: Django's built-in groups/permissions (PermissionsMixin) are not used;
capabilities come exclusively from the ``access_control.Permission`` catalog.
"""

from typing import ClassVar, Optional

from django.contrib.auth.models import AbstractBaseUser
from django.db import models

from .managers import UserManager


class User(AbstractBaseUser):
    """Account identified by email with a bcrypt password hash."""

    # Replaced by password_hash; no session logins are tracked.
    password = None
    last_login = None

    name = models.CharField(max_length=150)
    email = models.EmailField(unique=True)
    password_hash = models.CharField(max_length=128)
    permissions = models.ManyToManyField(
        "access_control.Permission",
        related_name="users",
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS: ClassVar[list[str]] = ["name"]

    objects = UserManager()

    class Meta:
        """Default ordering shows newest users first."""
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.email

    def set_password(self, raw_password: Optional[str]) -> None:  # type: ignore[override]
        """Override to ensure bcrypt hashing via manager utility."""

        if raw_password is None:
            self.password_hash = ""
        else:
            self.password_hash = UserManager.hash_password(raw_password)

    def check_password(self, raw_password: Optional[str]) -> bool:  # type: ignore[override]
        """Delegate to bcrypt verification helper."""

        if raw_password is None:
            return False
        return UserManager.verify_password(self, raw_password)

    def permission_names(self) -> set[str]:
        """Names of the permissions currently granted to this user."""
        return {permission.name for permission in self.permissions.all()}


__all__ = ["User"]
