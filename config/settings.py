import os
from pathlib import Path
from decouple import Csv, config


# BASE DIRECTORY
# BASE_DIR points to the project root (where manage.py is)
BASE_DIR = Path(__file__).resolve().parent.parent


# SECURITY SETTINGS

# SECURITY WARNING: keep the secret key used in production secret!
# Used for signing sessions, CSRF tokens and password reset links
SECRET_KEY = config('SECRET_KEY', default='django-insecure-CHANGE-THIS-IN-PRODUCTION')

# SECURITY WARNING: don't run with debug turned on in production!
# In DEBUG, 500 responses include the exception message and stack
DEBUG = config('DEBUG', default=True, cast=bool)

# Format: 'domain.com,www.domain.com,api.domain.com'
ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1,0.0.0.0', cast=Csv())


# INSTALLED APPS

INSTALLED_APPS = [
    # Django built-in apps
    'django.contrib.admin',  # Admin interface
    'django.contrib.auth',  # Authentication framework
    'django.contrib.contenttypes',  # Content types framework
    'django.contrib.sessions',  # Session framework
    'django.contrib.messages',  # Messaging framework (admin)
    'django.contrib.staticfiles',  # Static files management

    # Third-party apps
    'corsheaders',  # CORS headers support

    # Our custom apps
    # IMPORTANT: accounts must be first (custom user model)
    'apps.accounts',  # Users & authentication
    'apps.core',  # Companies, contacts, lookups, query pipeline
    'apps.leads',  # Leads & design configurations
    'apps.sites',  # Sites & report files
    'apps.tasks',  # Tasks & timeline
    'apps.notifications',  # In-app notifications
]


# MIDDLEWARE

# Each request passes through these in order (top to bottom)
# Each response passes through in reverse order (bottom to top)
MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',  # Security enhancements
    'django.contrib.sessions.middleware.SessionMiddleware',  # Session support
    'corsheaders.middleware.CorsMiddleware',  # CORS support (must be before CommonMiddleware)
    'django.middleware.common.CommonMiddleware',  # Common utilities
    'django.middleware.csrf.CsrfViewMiddleware',  # CSRF protection
    'django.contrib.auth.middleware.AuthenticationMiddleware',  # Authentication
    'django.contrib.messages.middleware.MessageMiddleware',  # Messages framework
    'django.middleware.clickjacking.XFrameOptionsMiddleware',  # Clickjacking protection
    'apps.core.middleware.ApiErrorMiddleware',  # JSON errors for /api/ (last: sees view exceptions first)
]


# URL CONFIGURATION

ROOT_URLCONF = 'config.urls'

# /api/companies and /api/companies/ both work
APPEND_SLASH = True


# TEMPLATES
# Only the admin renders templates
TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',  # Debug info
                'django.template.context_processors.request',  # Request object
                'django.contrib.auth.context_processors.auth',  # User object
                'django.contrib.messages.context_processors.messages',  # Messages
            ],
        },
    },
]


# ASGI/WSGI APPLICATION

ASGI_APPLICATION = 'config.asgi.application'

# Used by Gunicorn, uWSGI, etc.
WSGI_APPLICATION = 'config.wsgi.application'


# DATABASE

# SQLite by default so a fresh checkout runs without a database server
# Production: DB_ENGINE=postgresql with the DB_* variables
DB_ENGINE = config('DB_ENGINE', default='sqlite3')

if DB_ENGINE == 'sqlite3':
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': config('DB_NAME', default=str(BASE_DIR / 'db.sqlite3')),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': f'django.db.backends.{DB_ENGINE}',
            'NAME': config('DB_NAME', default='floatcrm_db'),
            'USER': config('DB_USER', default='floatcrm_user'),
            'PASSWORD': config('DB_PASSWORD', default='floatcrm_pass'),
            'HOST': config('DB_HOST', default='db'),  # 'db' is Docker service name
            'PORT': config('DB_PORT', default='5432'),

            # Keep connection open for 10 minutes
            'CONN_MAX_AGE': 600,

            'OPTIONS': {
                'connect_timeout': 10,  # Timeout if connection fails
            }
        }
    }


# AUTHENTICATION

# Custom user model (email login)
# IMPORTANT: This MUST be set before first migration!
AUTH_USER_MODEL = 'accounts.User'

AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
        'OPTIONS': {
            'min_length': 8,
        }
    },
    {
        'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator',
    },
]

# Password reset links stay valid for 10 minutes
PASSWORD_RESET_TIMEOUT = config('PASSWORD_RESET_TIMEOUT', default=10 * 60, cast=int)


# INTERNATIONALIZATION

LANGUAGE_CODE = 'en-us'

TIME_ZONE = config('TIME_ZONE', default='UTC')

USE_I18N = True

# All datetimes in database are stored in UTC
USE_TZ = True


# STATIC FILES

STATIC_URL = '/static/'

# collectstatic target (admin assets in production)
STATIC_ROOT = BASE_DIR / 'staticfiles'


# MEDIA FILES (User Uploads)

# Site reports and task attachments
# Example: http://localhost:8000/media/sites/reports/2025/01/bathymetry.pdf
MEDIA_URL = '/media/'
MEDIA_ROOT = Path(config('MEDIA_ROOT', default=str(BASE_DIR / 'media')))


# FRONTEND

# Single-page app: CORS origins and links in emails (reset password, tasks)
FRONTEND_URL = config('FRONTEND_URL', default='http://localhost:5173')


# CORS HEADERS (Cross-Origin Resource Sharing)

# The SPA calls the API with its session cookie
CORS_ALLOWED_ORIGINS = config('CORS_ALLOWED_ORIGINS', default=FRONTEND_URL, cast=Csv())
CORS_ALLOW_CREDENTIALS = True
CSRF_TRUSTED_ORIGINS = CORS_ALLOWED_ORIGINS


# CELERY (Background Tasks)

# Celery broker URL (where tasks are queued)
CELERY_BROKER_URL = config('REDIS_URL', default='redis://redis:6379/0')

# Celery result backend (where results are stored)
CELERY_RESULT_BACKEND = config('REDIS_URL', default='redis://redis:6379/0')

CELERY_ACCEPT_CONTENT = ['json']
CELERY_TASK_SERIALIZER = 'json'
CELERY_RESULT_SERIALIZER = 'json'
CELERY_TIMEZONE = TIME_ZONE

# Celery task time limit (5 minutes)
CELERY_TASK_TIME_LIMIT = 5 * 60

# Celery task soft time limit (4 minutes - gives 1 min for cleanup)
CELERY_TASK_SOFT_TIME_LIMIT = 4 * 60

# CELERY_TASK_ALWAYS_EAGER=True runs tasks inline (no worker needed)
CELERY_TASK_ALWAYS_EAGER = config('CELERY_TASK_ALWAYS_EAGER', default=False, cast=bool)


# EMAIL CONFIGURATION

# console: Prints emails to console (for development)
# smtp: Sends real emails via SMTP server (for production)
EMAIL_BACKEND = config(
    'EMAIL_BACKEND',
    default='django.core.mail.backends.console.EmailBackend'
)

EMAIL_HOST = config('EMAIL_HOST', default='smtp.gmail.com')
EMAIL_PORT = config('EMAIL_PORT', default=587, cast=int)
EMAIL_USE_TLS = config('EMAIL_USE_TLS', default=True, cast=bool)
EMAIL_HOST_USER = config('EMAIL_HOST_USER', default='')
EMAIL_HOST_PASSWORD = config('EMAIL_HOST_PASSWORD', default='')
DEFAULT_FROM_EMAIL = config('DEFAULT_FROM_EMAIL', default='Float CRM <noreply@floatcrm.local>')


# LOGGING

LOG_DIR = BASE_DIR / 'logs'
os.makedirs(LOG_DIR, exist_ok=True)

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,

    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {message}',
            'style': '{',
        },
    },

    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple' if DEBUG else 'verbose',
        },
        'file': {
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': LOG_DIR / 'django.log',
            'maxBytes': 1024 * 1024 * 10,  # 10 MB
            'backupCount': 5,
            'formatter': 'verbose',
        },
    },

    'loggers': {
        'django': {
            'handlers': ['console', 'file'],
            'level': config('LOG_LEVEL', default='INFO'),
            'propagate': True,
        },
        'apps': {  # Our custom apps
            'handlers': ['console', 'file'],
            'level': config('APPS_LOG_LEVEL', default='DEBUG' if DEBUG else 'INFO'),
            'propagate': False,
        },
    },
}


# CUSTOM SETTINGS

# List endpoints (QueryPipeline)
# ?limit= is capped at API_MAX_PAGE_SIZE
API_DEFAULT_PAGE_SIZE = config('API_DEFAULT_PAGE_SIZE', default=100, cast=int)
API_MAX_PAGE_SIZE = config('API_MAX_PAGE_SIZE', default=1000, cast=int)

# Session settings
SESSION_COOKIE_AGE = 86400  # 24 hours in seconds
SESSION_SAVE_EVERY_REQUEST = False  # Only save if modified

# "Remember me" on login keeps the session for 90 days
SESSION_REMEMBER_AGE = 90 * 24 * 60 * 60

# File upload settings
# Task attachments can be up to 50 MB; larger bodies stream to disk
FILE_UPLOAD_MAX_MEMORY_SIZE = 5 * 1024 * 1024  # 5 MB
DATA_UPLOAD_MAX_MEMORY_SIZE = 10 * 1024 * 1024  # 10 MB


# SECURITY SETTINGS (Production)

if not DEBUG:
    # HTTPS/SSL settings
    SECURE_SSL_REDIRECT = config('SECURE_SSL_REDIRECT', default=True, cast=bool)
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True

    # Security headers
    SECURE_CONTENT_TYPE_NOSNIFF = True
    X_FRAME_OPTIONS = 'DENY'

    # HSTS (HTTP Strict Transport Security)
    SECURE_HSTS_SECONDS = 31536000  # 1 year
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_PRELOAD = True


# DEFAULT AUTO FIELD

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
