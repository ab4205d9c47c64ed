"""Settings for the automated test suite."""

from .main import *

ENVIRONMENT = TESTING_ENVIRONMENT

DEBUG = False

SECRET_KEY = 'test-secret-key'
OTP_PEPPER = 'test-pepper'
SIMPLE_JWT['SIGNING_KEY'] = SECRET_KEY

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# Use in-memory cache for tests
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'test-cache',
    }
}

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

CELERY_TASK_ALWAYS_EAGER = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

WHATSAPP_API_URL = 'https://whatsapp.test/messages'
WHATSAPP_API_TOKEN = 'test-token'
