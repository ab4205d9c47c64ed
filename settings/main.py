from datetime import timedelta

from celery.schedules import crontab

from .base import *

INSTALLED_APPS += [
    'apps.shared',
    'apps.accounts',
    'corsheaders',
    'rest_framework',
    'rest_framework_simplejwt',
    'rest_framework_simplejwt.token_blacklist',
    'drf_spectacular',
    'apps.verification',
    'apps.events',

    # Celery and async tasks
    'django_celery_beat',
]

REST_FRAMEWORK = {
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAuthenticated',
    ],
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'rest_framework_simplejwt.authentication.JWTAuthentication',
    ],
    'EXCEPTION_HANDLER': 'apps.shared.exceptions.api_handler.custom_exception_handler',
}

AUTH_USER_MODEL = 'accounts.CustomUser'

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

# Environment
TESTING_ENVIRONMENT = 'testing'
PRODUCTION_ENVIRONMENT = 'production'
STAGING_ENVIRONMENT = 'staging'
DEVELOPMENT_ENVIRONMENT = 'development'

ENVIRONMENT = env.str('ENVIRONMENT', default=DEVELOPMENT_ENVIRONMENT)

# CORS
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    env('FRONTEND_URL', default='http://localhost:3000'),
]

# Allow all origins in development (can be restrictive in production)
if DEBUG:
    CORS_ALLOW_ALL_ORIGINS = True

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

CSRF_TRUSTED_ORIGINS = [
    'http://localhost:8000',
    'http://127.0.0.1:8000',
    'http://localhost:3000',
    'http://127.0.0.1:3000',
    env('FRONTEND_URL', default='http://localhost:3000'),
]

# Swagger
SPECTACULAR_SETTINGS = {
    'TITLE': 'Secret Friend API',
    'DESCRIPTION': 'Gift exchange events, passwordless login and secret friend draws',
    'VERSION': 'v1',
    'SERVE_INCLUDE_SCHEMA': False,
}

# Simple JWT Authentication Configuration
SIMPLE_JWT = {
    'ACCESS_TOKEN_LIFETIME': timedelta(minutes=60),  # 1 hour
    'REFRESH_TOKEN_LIFETIME': timedelta(days=7),     # 1 week
    'ROTATE_REFRESH_TOKENS': True,
    'BLACKLIST_AFTER_ROTATION': True,
    'UPDATE_LAST_LOGIN': True,

    'ALGORITHM': 'HS256',
    'SIGNING_KEY': env.str('JWT_SIGNING_KEY', default=SECRET_KEY),
    'VERIFYING_KEY': None,
    'AUDIENCE': None,
    'ISSUER': 'secret-friend-api',

    'AUTH_HEADER_TYPES': ('Bearer',),
    'AUTH_HEADER_NAME': 'HTTP_AUTHORIZATION',
    'USER_ID_FIELD': 'id',
    'USER_ID_CLAIM': 'user_id',

    'AUTH_TOKEN_CLASSES': ('rest_framework_simplejwt.tokens.AccessToken',),
    'TOKEN_TYPE_CLAIM': 'token_type',
    'JTI_CLAIM': 'jti',
}

# One-time passcodes
OTP_TTL_SECONDS = env.int('OTP_TTL_SECONDS', default=600)  # 10 minutes
OTP_MAX_ATTEMPTS = env.int('OTP_MAX_ATTEMPTS', default=5)
OTP_RESEND_COOLDOWN_SECONDS = env.int('OTP_RESEND_COOLDOWN_SECONDS', default=30)
OTP_PEPPER = env.str('OTP_PEPPER', default=SECRET_KEY)

# Secret friend draw
DRAW_MAX_SHUFFLE_ATTEMPTS = env.int('DRAW_MAX_SHUFFLE_ATTEMPTS', default=100)

# WhatsApp gateway
WHATSAPP_API_URL = env.str('WHATSAPP_API_URL', default='')
WHATSAPP_API_TOKEN = env.str('WHATSAPP_API_TOKEN', default='')
WHATSAPP_TIMEOUT_SECONDS = env.int('WHATSAPP_TIMEOUT_SECONDS', default=10)
WHATSAPP_COUNTRY_CODE = env.str('WHATSAPP_COUNTRY_CODE', default='55')

FRONTEND_URL = env.str('FRONTEND_URL', default='http://localhost:3000')

# Email Configuration
EMAIL_BACKEND = env.str('EMAIL_BACKEND', default='django.core.mail.backends.console.EmailBackend')
EMAIL_HOST = env.str('EMAIL_HOST', default='smtp.gmail.com')
EMAIL_PORT = env.int('EMAIL_PORT', default=587)
EMAIL_USE_TLS = env.bool('EMAIL_USE_TLS', default=True)
EMAIL_HOST_USER = env.str('EMAIL_HOST_USER', default='')
EMAIL_HOST_PASSWORD = env.str('EMAIL_HOST_PASSWORD', default='')
DEFAULT_FROM_EMAIL = env.str('DEFAULT_FROM_EMAIL', default='Amigo Secreto <noreply@amigosecreto.app>')

EMAIL_SUBJECT_PREFIX = '[Amigo Secreto] '

# Celery Configuration
CELERY_BROKER_URL = env.str('CELERY_BROKER_URL', default='redis://localhost:6379/0')
CELERY_RESULT_BACKEND = env.str('CELERY_RESULT_BACKEND', default='redis://localhost:6379/1')

CELERY_TASK_SERIALIZER = 'json'
CELERY_ACCEPT_CONTENT = ['json']
CELERY_RESULT_SERIALIZER = 'json'
CELERY_TIMEZONE = TIME_ZONE
CELERY_ENABLE_UTC = True

CELERY_TASK_ALWAYS_EAGER = False
CELERY_TASK_EAGER_PROPAGATES = True

CELERY_TASK_ROUTES = {
    'apps.verification.tasks.send_code_email_task': {'queue': 'delivery'},
    'apps.verification.tasks.send_code_whatsapp_task': {'queue': 'delivery'},
    'apps.events.tasks.send_gift_suggestion_reminder_task': {'queue': 'delivery'},
    'apps.verification.tasks.purge_expired_codes_task': {'queue': 'maintenance'},
}

CELERY_TASK_ANNOTATIONS = {
    'apps.verification.tasks.send_code_email_task': {
        'rate_limit': '30/m',
        'time_limit': 30,
    },
    'apps.verification.tasks.send_code_whatsapp_task': {
        'rate_limit': '30/m',
        'time_limit': 30,
    },
    'apps.verification.tasks.purge_expired_codes_task': {
        'time_limit': 120,  # 2 minutes for cleanup
    },
}

CELERY_BEAT_SCHEDULE = {
    'purge-expired-verification-codes': {
        'task': 'apps.verification.tasks.purge_expired_codes_task',
        'schedule': crontab(minute='*/30'),
    },
}

CELERY_BEAT_SCHEDULER = 'django_celery_beat.schedulers:DatabaseScheduler'

# Redis Cache Configuration (separate from Celery)
CACHES = {
    'default': {
        'BACKEND': 'django_redis.cache.RedisCache',
        'LOCATION': env.str('REDIS_URL', default='redis://localhost:6379/2'),
        'OPTIONS': {
            'CLIENT_CLASS': 'django_redis.client.DefaultClient',
        },
        'TIMEOUT': 3600,  # 1 hour default timeout
        'KEY_PREFIX': 'secret_friend',
        'VERSION': 1,
    }
}
