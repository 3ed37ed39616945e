"""WSGI entry point; seeds the permission catalog once the app is loaded."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "core.settings")

application = get_wsgi_application()

from core.startup import run_startup_tasks  # noqa: E402

run_startup_tasks()
