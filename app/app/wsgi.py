"""
WSGI config for the counseling office API.
"""

import os
from django.core.wsgi import get_wsgi_application

# Web servers run production settings unless DJANGO_SETTINGS_MODULE says otherwise
if 'DJANGO_SETTINGS_MODULE' not in os.environ:
    os.environ['DJANGO_SETTINGS_MODULE'] = 'app.settings.production'

application = get_wsgi_application()
