"""
ASGI config for the counseling office API.
"""
# app/asgi.py
import os
from django.core.asgi import get_asgi_application

# Web servers run production settings unless DJANGO_SETTINGS_MODULE says otherwise
if 'DJANGO_SETTINGS_MODULE' not in os.environ:
    os.environ['DJANGO_SETTINGS_MODULE'] = 'app.settings.production'

application = get_asgi_application()
