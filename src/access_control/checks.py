"""System checks for route permission declarations."""

from django.core.checks import Error, register

from access_control.models import PermissionName
from access_control.permissions import RoleGuard


def _declared_requirements(view_cls):
    yield getattr(view_cls, "required_permissions", None)
    yield from (getattr(view_cls, "action_permissions", None) or {}).values()


@register()
def role_guarded_views_declare_known_permissions(app_configs, **kwargs):
    """Ensure RoleGuard-protected views only name permissions from the canonical catalog.

    Only the project's guarded viewsets are inspected; new guarded views
    should be added to the list below.
    """
    errors: list[Error] = []

    # Import here to avoid circular imports at module load time.
    from articles.views import ArticleViewSet
    from users.views import UserViewSet

    known = set(PermissionName.values)

    for view_cls in (ArticleViewSet, UserViewSet):
        if RoleGuard not in getattr(view_cls, "permission_classes", []):
            continue
        for requirement in _declared_requirements(view_cls):
            unknown = set(requirement or ()) - known
            if unknown:
                errors.append(
                    Error(
                        f"{view_cls.__name__} requires unknown permission(s): "
                        f"{', '.join(sorted(unknown))}.",
                        obj=view_cls,
                        id="access_control.E001",
                    )
                )

    return errors
