import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
DEBUG = os.getenv('DEBUG', '0') == '1'
ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', '*').split(',')

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'rest_framework',
    'corsheaders',
    'console',
]

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'config.urls'
WSGI_APPLICATION = 'config.wsgi.application'

# The console owns no data; every entity lives behind the upstream platform API.
DATABASES = {}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
USE_TZ = True
TIME_ZONE = os.getenv('TIME_ZONE', 'America/Sao_Paulo')

# CORS
CORS_ALLOW_ALL_ORIGINS = os.getenv('CORS_ALLOW_ALL_ORIGINS', '1') == '1'

# REST Framework
REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
        'rest_framework.parsers.MultiPartParser',
        'rest_framework.parsers.FormParser',
    ],
    # Sessions and users belong to the upstream platform.
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [],
    'UNAUTHENTICATED_USER': None,
    'EXCEPTION_HANDLER': 'console.exception_handler.unified_exception_handler',
}

# Upstream platform API
UPSTREAM_API_BASE = os.getenv('UPSTREAM_API_BASE', 'http://localhost:5000')
UPSTREAM_API_TIMEOUT = float(os.getenv('UPSTREAM_API_TIMEOUT', '10'))
UPSTREAM_API_RETRIES = int(os.getenv('UPSTREAM_API_RETRIES', '3'))

# Query cache: Redis when available, process memory otherwise
REDIS_URL = os.getenv('REDIS_URL', '')
if REDIS_URL:
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.redis.RedisCache',
            'LOCATION': REDIS_URL,
        }
    }
else:
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
            'LOCATION': 'console-queries',
        }
    }

# Seconds a cached read stays fresh when nothing invalidates it
CONSOLE_QUERY_TTL = int(os.getenv('CONSOLE_QUERY_TTL', '60'))

# "response" returns toasts in the JSON body, "log" only writes them to the log
CONSOLE_NOTIFIER = os.getenv('CONSOLE_NOTIFIER', 'response')

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'console': {
            'format': '%(asctime)s %(levelname)s %(name)s %(message)s',
        },
    },
    'handlers': {
        'stdout': {
            'class': 'logging.StreamHandler',
            'formatter': 'console',
        },
    },
    'loggers': {
        'console': {
            'handlers': ['stdout'],
            'level': LOG_LEVEL,
            'propagate': True,
        },
    },
}
