# app/settings/__init__.py

"""
Settings package for the counseling office API

base.py holds everything shared; development.py and production.py override
it. Point DJANGO_SETTINGS_MODULE at one of them directly
(manage.py defaults to development, wsgi/asgi to production). Using the
bare package picks the variant named by APP_ENVIRONMENT.
"""

import os

if os.environ.get('DJANGO_SETTINGS_MODULE') == 'app.settings':
    environment = os.environ.get('APP_ENVIRONMENT', 'development')
    if environment == 'production':
        from .production import *  # noqa: F401,F403
    else:
        from .development import *  # noqa: F401,F403
