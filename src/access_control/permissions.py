"""Role guard: compare a caller's permissions with a route's declared requirement.

Views declare requirements explicitly:

- ``required_permissions`` applies to every action of the view (resource group);
- ``action_permissions`` maps a single action to its own requirement and
  overrides the group value, ``None`` marking that action as public.

A caller passes when they hold at least one of the listed permissions.
"""

from typing import Iterable, Optional

from django.contrib.auth import get_user_model
from rest_framework import permissions
from rest_framework.exceptions import PermissionDenied

Requirement = Optional[tuple[str, ...]]

_UNSET = object()


def resolve_requirement(view) -> Requirement:
    """Return the requirement for the view's current action (most specific wins)."""
    action = getattr(view, "action", None)
    action_permissions = getattr(view, "action_permissions", None) or {}
    declared = action_permissions.get(action, _UNSET) if action else _UNSET
    if declared is _UNSET:
        declared = getattr(view, "required_permissions", None)
    return tuple(declared) if declared is not None else None


def authorize(caller_id: Optional[int], required: Optional[Iterable[str]]) -> set[str]:
    """Allow or deny a caller against a requirement; return the caller's permission names.

    Raises ``PermissionDenied`` when the caller is missing, unknown, or holds
    none of the required permissions. A ``None`` requirement always passes.
    """
    if required is None:
        return set()
    required = tuple(required)

    if caller_id is None:
        raise PermissionDenied("User not authenticated")

    user = get_user_model().objects.prefetch_related("permissions").filter(pk=caller_id).first()
    if user is None:
        raise PermissionDenied("User not found")

    granted = user.permission_names()
    if granted.isdisjoint(required):
        raise PermissionDenied(f"Access denied. Required permissions: {', '.join(required)}")
    return granted


class RoleGuard(permissions.BasePermission):
    """DRF permission class applying ``authorize`` to the view's declared requirement."""

    def has_permission(self, request, view) -> bool:
        required = resolve_requirement(view)
        if required is None:
            return True

        user = getattr(request, "user", None)
        if not user or not getattr(user, "is_authenticated", False):
            # DRF turns this into 401 because no authenticator succeeded.
            return False

        authorize(user.pk, required)
        return True


__all__ = ["RoleGuard", "authorize", "resolve_requirement"]
