"""ASGI entry point; seeds the permission catalog once the app is loaded."""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "core.settings")

application = get_asgi_application()

from core.startup import run_startup_tasks  # noqa: E402

run_startup_tasks()
