# app/settings/production.py
from .base import *

ENVIRONMENT = 'production'

DEBUG = False

# Parse ALLOWED_HOSTS from environment variable
ALLOWED_HOSTS_ENV = os.environ.get('ALLOWED_HOSTS', '')
if ALLOWED_HOSTS_ENV:
    ALLOWED_HOSTS = [host.strip() for host in ALLOWED_HOSTS_ENV.split(',') if host.strip()]
else:
    ALLOWED_HOSTS = ['localhost']

# Production database with SSL
DATABASES['default'].update({
    'OPTIONS': {
        'sslmode': os.environ.get('DB_SSL_MODE', 'require'),
    }
})

# Security settings
SECURE_SSL_REDIRECT = os.environ.get('SECURE_SSL_REDIRECT', 'False') == 'True'
SECURE_BROWSER_XSS_FILTER = True
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = 'SAMEORIGIN'

# CSRF settings (adjust based on your HTTPS setup)
CSRF_COOKIE_SECURE = os.environ.get('HTTPS_ENABLED', 'False') == 'True'
SESSION_COOKIE_SECURE = os.environ.get('HTTPS_ENABLED', 'False') == 'True'

# CSRF trusted origins
CSRF_TRUSTED_ORIGINS = [
    'http://localhost:3000',
    'http://127.0.0.1:3000',
    'http://localhost:5173',
    'http://127.0.0.1:5173',
]

# Add custom trusted origins from environment
CSRF_TRUSTED_ORIGINS_ENV = os.environ.get('CSRF_TRUSTED_ORIGINS', '')
if CSRF_TRUSTED_ORIGINS_ENV:
    CSRF_TRUSTED_ORIGINS.extend([
        origin.strip() for origin in CSRF_TRUSTED_ORIGINS_ENV.split(',') if origin.strip()
    ])

# CORS settings
CORS_ALLOW_ALL_ORIGINS = False
CORS_ALLOWED_ORIGINS = [
    'http://localhost:3000',
    'http://127.0.0.1:3000',
    'http://localhost:5173',
    'http://127.0.0.1:5173',
]

# Add custom CORS origins from environment
CORS_ALLOWED_ORIGINS_ENV = os.environ.get('CORS_ALLOWED_ORIGINS', '')
if CORS_ALLOWED_ORIGINS_ENV:
    CORS_ALLOWED_ORIGINS.extend([
        origin.strip() for origin in CORS_ALLOWED_ORIGINS_ENV.split(',') if origin.strip()
    ])

CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_HEADERS = [
    'accept',
    'accept-encoding',
    'authorization',
    'content-type',
    'dnt',
    'origin',
    'user-agent',
    'x-csrftoken',
    'x-requested-with',
]

# Static files
STATIC_ROOT = '/app/staticfiles/'
MEDIA_ROOT = '/app/media/'

# Logging for production
LOGGING['loggers'].update({
    'users': {
        'handlers': ['console'],
        'level': 'WARNING',  # Less verbose in production
        'propagate': False,
    },
    'catalogs': {
        'handlers': ['console'],
        'level': 'WARNING',
        'propagate': False,
    },
    'psychologists': {
        'handlers': ['console'],
        'level': 'WARNING',
        'propagate': False,
    },
})
