"""Best-effort seeding run once per process start."""

import logging

from .services import PermissionService, UserPermissionService

logger = logging.getLogger(__name__)


def initialize(
    permission_service: PermissionService | None = None,
    user_permission_service: UserPermissionService | None = None,
) -> bool:
    """Seed the permission catalog, then the root account.

    Permissions go first because the root account receives the whole catalog.
    Errors are logged and swallowed so a missing table or an unreachable
    database never prevents the process from starting. Returns True when both
    steps completed.
    """
    permission_service = permission_service or PermissionService()
    user_permission_service = user_permission_service or UserPermissionService()

    try:
        permission_service.seed_permissions()
        user_permission_service.create_root_user()
    except Exception:
        logger.exception("Startup seeding failed")
        return False
    return True


__all__ = ["initialize"]
