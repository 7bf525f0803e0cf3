# config/settings.py

import os
from pathlib import Path
import dj_database_url
from dotenv import load_dotenv

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent

# Loads environment variables from .env file
load_dotenv(BASE_DIR / '.env')

# Quick-start development settings - not for production
SECRET_KEY = os.getenv('SECRET_KEY', 'a-default-secret-key-for-development')
DEBUG = os.getenv('DEBUG', '1') == '1'

ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', '127.0.0.1,localhost,testserver').split(',')

# Application definition
INSTALLED_APPS = [
    'daphne', # RT: The real-time server
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Local apps
    'core',
    'accounts',
    'safety',
    'rooms',
    'messaging',
    'triage',
    'bookings',
    'peers',
    'peer_rooms',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'
ASGI_APPLICATION = 'config.asgi.application'

# Database
DATABASES = {
    'default': dj_database_url.config(default=f'sqlite:///{BASE_DIR / "db.sqlite3"}')
}
# SQLite test databases live in a file so tests can hit them from several threads
if DATABASES['default']['ENGINE'] == 'django.db.backends.sqlite3':
    DATABASES['default']['TEST'] = {'NAME': str(BASE_DIR / 'test_db.sqlite3')}

# Channels
# Redis in production; the in-memory layer only works inside a single process.
REDIS_URL = os.getenv('REDIS_URL', '')
if REDIS_URL:
    CHANNEL_LAYERS = {
        "default": {
            "BACKEND": "channels_redis.core.RedisChannelLayer",
            "CONFIG": {
                "hosts": [REDIS_URL],
            },
        },
    }
else:
    CHANNEL_LAYERS = {
        "default": {
            "BACKEND": "channels.layers.InMemoryChannelLayer",
        },
    }

# Custom User Model
AUTH_USER_MODEL = 'accounts.User'

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]

# Internationalization
LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

# Static files (admin only, served by whitenoise)
STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage",
    },
}

# Default primary key field type
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Email Configuration
EMAIL_BACKEND = os.getenv('EMAIL_BACKEND', 'django.core.mail.backends.console.EmailBackend')
EMAIL_HOST = os.getenv('EMAIL_HOST', 'localhost')
EMAIL_PORT = int(os.getenv('EMAIL_PORT', '587'))
EMAIL_USE_TLS = os.getenv('EMAIL_USE_TLS', '1') == '1'
EMAIL_HOST_USER = os.getenv('EMAIL_HOST_USER', '')
EMAIL_HOST_PASSWORD = os.getenv('EMAIL_HOST_PASSWORD', '')
DEFAULT_FROM_EMAIL = os.getenv('DEFAULT_FROM_EMAIL', 'noreply@wellbeing.local')

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '{asctime} {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': os.getenv('DJANGO_LOG_LEVEL', 'WARNING'),
            'propagate': False,
        },
    },
}

# --- Support service settings ---

# Message limits
SUPPORT_MESSAGE_MAX_LENGTH = int(os.getenv('SUPPORT_MESSAGE_MAX_LENGTH', '2000'))
SUPPORT_INITIAL_MESSAGE_MAX_LENGTH = int(os.getenv('SUPPORT_INITIAL_MESSAGE_MAX_LENGTH', '1000'))
SUPPORT_MESSAGE_EDIT_WINDOW_MINUTES = int(os.getenv('SUPPORT_MESSAGE_EDIT_WINDOW_MINUTES', '60'))
SUPPORT_MESSAGE_DELETE_WINDOW_HOURS = int(os.getenv('SUPPORT_MESSAGE_DELETE_WINDOW_HOURS', '24'))
SUPPORT_MESSAGES_PAGE_SIZE = int(os.getenv('SUPPORT_MESSAGES_PAGE_SIZE', '50'))
SUPPORT_MESSAGES_MAX_PAGE_SIZE = int(os.getenv('SUPPORT_MESSAGES_MAX_PAGE_SIZE', '200'))

# Bookings
BOOKING_MIN_DURATION_MINUTES = int(os.getenv('BOOKING_MIN_DURATION_MINUTES', '30'))

# Crisis routing
CRISIS_HOTLINE_NUMBERS = os.getenv('CRISIS_HOTLINE_NUMBERS', '141,112').split(',')
CRISIS_BANNER_TEXT = os.getenv('CRISIS_BANNER_TEXT', 'If you feel unsafe, please call now.')

# Peer supporter applications
PEER_APPLICATION_EMAIL_DOMAIN = os.getenv('PEER_APPLICATION_EMAIL_DOMAIN', '@aui.ma')

# Peer (group) rooms
PEER_ROOM_MESSAGE_MAX_LENGTH = int(os.getenv('PEER_ROOM_MESSAGE_MAX_LENGTH', '1000'))

# Moderation and audit views
REVIEW_QUEUE_PAGE_SIZE = int(os.getenv('REVIEW_QUEUE_PAGE_SIZE', '50'))
AUDIT_LOG_PAGE_SIZE = int(os.getenv('AUDIT_LOG_PAGE_SIZE', '50'))

# Password Reset Settings
PASSWORD_RESET_TIMEOUT = 86400  # 24 hours

# Security settings for production
if not DEBUG:
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True
    SECURE_SSL_REDIRECT = True
    SECURE_HSTS_SECONDS = 31536000
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_PRELOAD = True
