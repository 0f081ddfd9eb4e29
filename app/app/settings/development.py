# app/settings/development.py
from .base import *

ENVIRONMENT = 'development'

# Database for development
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.postgresql',
        'HOST': os.environ.get('DB_HOST', 'db'),
        'NAME': os.environ.get('DB_NAME', 'counselingdb'),
        'USER': os.environ.get('DB_USER', 'counseling'),
        'PASSWORD': os.environ.get('DB_PASSWORD', 'counseling'),
        'PORT': os.environ.get('DB_PORT', '5432'),
    }
}

# Override database settings if running tests
if 'test' in sys.argv or 'pytest' in sys.modules or os.environ.get('DB_ENGINE') == 'sqlite':
    DATABASES['default'] = {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }


# Development-specific settings
CORS_ALLOW_ALL_ORIGINS = True  # Be careful with this in production

DEBUG = os.getenv("DEBUG", "False") == "True"
ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")

LOGGING['loggers']['appointments']['level'] = 'DEBUG'
