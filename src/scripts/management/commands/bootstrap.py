"""Seed the permission catalog and the root account."""

from django.core.management.base import BaseCommand, CommandError

from access_control.bootstrap import initialize
from access_control.services import PermissionService, UserPermissionService


class Command(BaseCommand):
    """Management command running the same seeding as process start."""

    help = (
        "Seed the admin/editor/reader permissions and the root account. "
        "Safe to run repeatedly. Use --strict to fail instead of only logging errors."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--strict",
            action="store_true",
            help="Exit with an error when a seeding step fails.",
        )

    def handle(self, *args, **options):
        """Entrypoint for the management command."""
        self.stdout.write("Seeding permissions and root user...")
        if options.get("strict"):
            self._run_strict()
        elif not initialize():
            self.stdout.write(self.style.WARNING("Seeding failed; see logs."))
            return
        self.stdout.write(self.style.SUCCESS("Seed completed."))

    @staticmethod
    def _run_strict() -> None:
        try:
            PermissionService().seed_permissions()
            UserPermissionService().create_root_user()
        except Exception as exc:
            raise CommandError(f"Seeding failed: {exc}") from exc
