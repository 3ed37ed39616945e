"""Process start hooks shared by the WSGI and ASGI entry points."""

from django.conf import settings

from access_control.bootstrap import initialize


def run_startup_tasks() -> None:
    """Seed permissions and the root account unless disabled by settings."""
    if settings.BOOTSTRAP_ON_STARTUP:
        initialize()


__all__ = ["run_startup_tasks"]
