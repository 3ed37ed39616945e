"""Permission catalog granted to users through ``User.permissions``."""

from django.db import models


class PermissionName(models.TextChoices):
    """Canonical permissions seeded on every start."""

    ADMIN = "admin", "Manage articles and users"
    EDITOR = "editor", "Manage articles"
    READER = "reader", "Read articles only"


class Permission(models.Model):
    """A named capability that can be granted to any number of users."""

    name = models.CharField(max_length=50, unique=True)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.name


__all__ = ["Permission", "PermissionName"]
