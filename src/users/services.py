"""Administrative CRUD over user accounts."""

import logging
from typing import Any

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from authentication.services import EMAIL_IN_USE
from core.exceptions import Conflict

logger = logging.getLogger(__name__)

User = get_user_model()

UPDATABLE_FIELDS = ("name", "email", "password")


class UserService:
    """Create, read, update and delete users; lookups return None when absent."""

    @staticmethod
    def _users():
        return User.objects.prefetch_related("permissions")

    def create(self, name: str, email: str, password: str):
        email = User.objects.normalize_email(email)
        if User.objects.filter(email=email).exists():
            raise Conflict(EMAIL_IN_USE)
        try:
            with transaction.atomic():
                user = User.objects.create_user(email=email, password=password, name=name)
        except IntegrityError as exc:
            raise Conflict(EMAIL_IN_USE) from exc
        return self.find_one(user.pk)

    def find_all(self) -> list:
        return list(self._users().order_by("-created_at", "-id"))

    def find_one(self, user_id: int):
        return self._users().filter(pk=user_id).first()

    def find_by_email(self, email: str):
        return self._users().filter(email=User.objects.normalize_email(email)).first()

    def update(self, user_id: int, fields: dict[str, Any]):
        """Apply the given fields; returns None when the user does not exist."""
        user = User.objects.filter(pk=user_id).first()
        if user is None:
            return None

        changes = {name: value for name, value in fields.items() if name in UPDATABLE_FIELDS}
        if "email" in changes:
            changes["email"] = User.objects.normalize_email(changes["email"])
            if User.objects.filter(email=changes["email"]).exclude(pk=user_id).exists():
                raise Conflict(EMAIL_IN_USE)
        if "password" in changes:
            user.set_password(changes.pop("password"))
            changes["password_hash"] = user.password_hash

        for name, value in changes.items():
            setattr(user, name, value)
        try:
            with transaction.atomic():
                user.save(update_fields=[*changes, "updated_at"])
        except IntegrityError as exc:
            raise Conflict(EMAIL_IN_USE) from exc
        return self.find_one(user_id)

    def remove(self, user_id: int) -> bool:
        """Delete the user with their articles and grants; False when nothing matched."""
        deleted, _ = User.objects.filter(pk=user_id).delete()
        if deleted:
            logger.info("User %s deleted", user_id)
        return bool(deleted)


__all__ = ["UserService"]
