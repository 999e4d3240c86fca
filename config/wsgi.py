"""WSGI entry point for the hotel booking API.

Production servers set DJANGO_SETTINGS_MODULE to ``config.settings.prod``;
without it the development settings are used.
"""

import os
from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.dev')

application = get_wsgi_application()
