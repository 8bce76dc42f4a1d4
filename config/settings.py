"""
Configuración del backend de laboratorios (casos, triaje y pólizas).

Todo lo que cambia entre entornos se lee de variables de entorno (.env).
"""

import os
from datetime import timedelta
from pathlib import Path

from corsheaders.defaults import default_headers
from dotenv import load_dotenv


def env_list(nombre, default=''):
    return [v.strip() for v in os.getenv(nombre, default).split(',') if v.strip()]


BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / '.env')

# ============================================================================
# SECURITY SETTINGS
# ============================================================================

SECRET_KEY = os.getenv('SECRET_KEY', 'django-insecure-CHANGE-THIS-IN-PRODUCTION')

DEBUG = os.getenv('DEBUG', 'False') == 'True'

ALLOWED_HOSTS = env_list('ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver')

# ============================================================================
# STORAGE (MinIO en desarrollo, S3 en producción)
# ============================================================================

STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'minio')
AWS_ACCESS_KEY_ID = os.getenv('AWS_ACCESS_KEY_ID', 'minioadmin')
AWS_SECRET_ACCESS_KEY = os.getenv('AWS_SECRET_ACCESS_KEY', 'minioadmin')
AWS_S3_REGION_NAME = os.getenv('AWS_S3_REGION_NAME', 'us-east-1')
MINIO_ENDPOINT_URL = os.getenv('MINIO_ENDPOINT_URL', 'http://localhost:9000')

# Un bucket por tipo de archivo
STORAGE_BUCKETS = {
    'case_pdfs': os.getenv('CASE_PDFS_BUCKET', 'case-pdfs'),
    'recibos_poliza': os.getenv('RECIBOS_POLIZA_BUCKET', 'aseguradora-recibos'),
    'case_images': os.getenv('CASE_IMAGES_BUCKET', 'case-images'),
    'doctor_signatures': os.getenv('DOCTOR_SIGNATURES_BUCKET', 'doctor-signatures'),
}

if STORAGE_BACKEND == 's3':
    AWS_DEFAULT_ACL = 'private'
    AWS_S3_FILE_OVERWRITE = False
    AWS_QUERYSTRING_AUTH = True
    AWS_QUERYSTRING_EXPIRE = 3600
else:
    AWS_S3_ENDPOINT_URL = MINIO_ENDPOINT_URL
    AWS_S3_USE_SSL = False

# ============================================================================
# APPLICATION DEFINITION
# ============================================================================

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    'rest_framework',
    'rest_framework_simplejwt',
    'rest_framework_simplejwt.token_blacklist',
    'corsheaders',
    'django_filters',
    'django_currentuser',
    'django_extensions',
    'storages',

    'authentication',
    'api.laboratories.apps.LaboratoriesConfig',
    'api.users.apps.UsersConfig',
    'api.patients.apps.PatientsConfig',
    'api.cases.apps.CasesConfig',
    'api.triage.apps.TriageConfig',
    'api.insurance.apps.InsuranceConfig',
    'api.changelog.apps.ChangelogConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',
    'corsheaders.middleware.CorsMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'authentication.middleware.CSRFExemptMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'django_currentuser.middleware.ThreadLocalUserMiddleware',
    'authentication.middleware.LoginRateLimitMiddleware',
]

ROOT_URLCONF = 'config.urls'
WSGI_APPLICATION = 'config.wsgi.application'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

# ============================================================================
# DATABASE
# ============================================================================

# PostgreSQL cuando hay DB_NAME; SQLite para desarrollo local y tests
if os.getenv('DB_NAME'):
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': os.getenv('DB_NAME'),
            'USER': os.getenv('DB_USER'),
            'PASSWORD': os.getenv('DB_PASSWORD'),
            'HOST': os.getenv('DB_HOST', 'localhost'),
            'PORT': os.getenv('DB_PORT', '5432'),
            'CONN_MAX_AGE': int(os.getenv('DB_CONN_MAX_AGE', 60)),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'db.sqlite3',
        }
    }

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# ============================================================================
# USUARIOS Y CONTRASEÑAS
# ============================================================================

AUTH_USER_MODEL = 'users.Usuario'

AUTHENTICATION_BACKENDS = [
    'authentication.backends.UsuarioAuthBackend',
    'django.contrib.auth.backends.ModelBackend',
]

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator', 'OPTIONS': {'min_length': 8}},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
]

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.Argon2PasswordHasher',
    'django.contrib.auth.hashers.BCryptSHA256PasswordHasher',
    'django.contrib.auth.hashers.PBKDF2PasswordHasher',
]

PASSWORD_RESET_HOURS = 1

# Bloqueo de login por IP (authentication.middleware.LoginRateLimitMiddleware)
LOGIN_MAX_ATTEMPTS = int(os.getenv('LOGIN_MAX_ATTEMPTS', 5))
LOGIN_BLOCK_SECONDS = int(os.getenv('LOGIN_BLOCK_SECONDS', 60))

# ============================================================================
# INTERNATIONALIZATION
# ============================================================================

LANGUAGE_CODE = 'es-ve'
TIME_ZONE = os.getenv('TIME_ZONE', 'America/Caracas')
USE_I18N = True
USE_TZ = True

STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

# ============================================================================
# REST FRAMEWORK
# ============================================================================

REST_FRAMEWORK = {
    # Todas las respuestas salen como {success, status_code, message, data, errors}
    'DEFAULT_RENDERER_CLASSES': [
        'api.utils.renderers.StandardizedJSONRenderer',
        'rest_framework.renderers.BrowsableAPIRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
        'rest_framework.parsers.FormParser',
        'rest_framework.parsers.MultiPartParser',
    ],
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'authentication.jwt_cookie_authentication.JWTCookieAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAuthenticated',
    ],
    'EXCEPTION_HANDLER': 'api.utils.exception_handlers.custom_exception_handler',
    'DEFAULT_FILTER_BACKENDS': [
        'django_filters.rest_framework.DjangoFilterBackend',
    ],
    # Casos, pacientes y pólizas paginan a mano con {data, count, page, limit, totalPages}
    'DEFAULT_PAGINATION_CLASS': 'rest_framework.pagination.PageNumberPagination',
    'PAGE_SIZE': 10,
    'DATETIME_FORMAT': '%Y-%m-%d %H:%M:%S',
    'DATE_FORMAT': '%Y-%m-%d',
    'DEFAULT_THROTTLE_CLASSES': [
        'rest_framework.throttling.AnonRateThrottle',
        'rest_framework.throttling.UserRateThrottle',
    ],
    'DEFAULT_THROTTLE_RATES': {
        'anon': os.getenv('THROTTLE_ANON', '100/hour'),
        'user': os.getenv('THROTTLE_USER', '2000/hour'),
    },
}

# ============================================================================
# SIMPLE JWT (tokens en cookies HttpOnly)
# ============================================================================

SIMPLE_JWT = {
    'ACCESS_TOKEN_LIFETIME': timedelta(hours=1),
    'REFRESH_TOKEN_LIFETIME': timedelta(days=7),
    'ROTATE_REFRESH_TOKENS': True,
    'BLACKLIST_AFTER_ROTATION': True,
    'UPDATE_LAST_LOGIN': True,
    'SIGNING_KEY': SECRET_KEY,
    'AUTH_HEADER_TYPES': ('Bearer',),
    'AUTH_COOKIE': 'access_token',
    'AUTH_COOKIE_REFRESH': 'refresh_token',
}

# ============================================================================
# CORS Y CSRF
# ============================================================================

ORIGENES_DESARROLLO = 'http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000'

CORS_ALLOWED_ORIGINS = env_list('CORS_ALLOWED_ORIGINS', ORIGENES_DESARROLLO if DEBUG else '')
CSRF_TRUSTED_ORIGINS = env_list('CSRF_TRUSTED_ORIGINS', ORIGENES_DESARROLLO if DEBUG else '')
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_HEADERS = list(default_headers) + ['set-cookie', 'x-csrftoken']
CORS_EXPOSE_HEADERS = ['set-cookie']
CORS_PREFLIGHT_MAX_AGE = 86400

# En desarrollo el frontend corre en HTTP; en producción las cookies viajan cross-site
SESSION_COOKIE_SECURE = CSRF_COOKIE_SECURE = not DEBUG
SESSION_COOKIE_SAMESITE = CSRF_COOKIE_SAMESITE = 'Lax' if DEBUG else 'None'
SESSION_COOKIE_HTTPONLY = True
CSRF_COOKIE_HTTPONLY = not DEBUG

# La sesión de Django solo la usa el admin
SESSION_COOKIE_NAME = 'admin_sessionid'
SESSION_COOKIE_PATH = '/admin/'
CSRF_COOKIE_NAME = 'admin_csrftoken'
CSRF_COOKIE_PATH = '/admin/'

if not DEBUG:
    SECURE_HSTS_SECONDS = 31536000
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_CONTENT_TYPE_NOSNIFF = True
    X_FRAME_OPTIONS = 'DENY'
    SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')

# ============================================================================
# CACHE (intentos de login)
# ============================================================================

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'labcore',
        'TIMEOUT': 300,
    }
}

# ============================================================================
# LOGGING
# ============================================================================

LOGS_DIR = BASE_DIR / 'logs'
LOGS_DIR.mkdir(exist_ok=True)
NIVEL_APPS = 'DEBUG' if DEBUG else 'INFO'


def _archivo_rotativo(nombre, nivel):
    return {
        'level': nivel,
        'class': 'logging.handlers.RotatingFileHandler',
        'filename': LOGS_DIR / nombre,
        'maxBytes': 10 * 1024 * 1024,
        'backupCount': 5,
        'formatter': 'verbose',
        'encoding': 'utf-8',
        'delay': True,
    }


LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '[{levelname}] {asctime} {name} {process:d} {message}',
            'style': '{',
        },
        'simple': {
            'format': '[{levelname}] {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'level': 'INFO',
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
            'stream': 'ext://sys.stdout',
        },
        'file': _archivo_rotativo('django.log', 'INFO'),
        'error_file': _archivo_rotativo('errors.log', 'ERROR'),
    },
    'loggers': {
        '': {'handlers': ['console', 'file'], 'level': 'INFO'},
        'django': {'handlers': ['console', 'file', 'error_file'], 'level': 'INFO', 'propagate': False},
        'django.request': {'handlers': ['error_file'], 'level': 'ERROR', 'propagate': False},
        **{
            app: {'handlers': ['console', 'file', 'error_file'], 'level': NIVEL_APPS, 'propagate': False}
            for app in ('api', 'authentication', 'common')
        },
    },
}

# ============================================================================
# EMAIL
# ============================================================================

EMAIL_BACKEND = os.getenv('EMAIL_BACKEND', 'django.core.mail.backends.smtp.EmailBackend')
EMAIL_HOST = os.getenv('EMAIL_HOST', 'smtp.gmail.com')
EMAIL_PORT = int(os.getenv('EMAIL_PORT', 587))
EMAIL_USE_TLS = os.getenv('EMAIL_USE_TLS', 'True') == 'True'
EMAIL_HOST_USER = os.getenv('EMAIL_HOST_USER')
EMAIL_HOST_PASSWORD = os.getenv('EMAIL_HOST_PASSWORD')
EMAIL_TIMEOUT = int(os.getenv('EMAIL_TIMEOUT', 30))
DEFAULT_FROM_EMAIL = os.getenv('DEFAULT_FROM_EMAIL', f'Laboratorio <{EMAIL_HOST_USER}>')

# Enlaces en correos (reset de contraseña)
FRONTEND_URL = os.getenv('FRONTEND_URL', 'http://localhost:5173')

# ============================================================================
# WEBHOOKS DE DOCUMENTOS (n8n)
# ============================================================================

# Se usan cuando el laboratorio no define config.webhooks
GENERATE_DOC_WEBHOOK = os.getenv('GENERATE_DOC_WEBHOOK', '')
GENERATE_PDF_WEBHOOK = os.getenv('GENERATE_PDF_WEBHOOK', '')
WEBHOOK_TIMEOUT = int(os.getenv('WEBHOOK_TIMEOUT', 30))

DOC_POLL_ATTEMPTS = 10
PDF_POLL_ATTEMPTS = 15
POLL_DELAY_SECONDS = 2

# ============================================================================
# ALERTAS DE PÓLIZAS
# ============================================================================

POLIZA_DIAS_POR_VENCER = 30
POLIZA_ALERTA_UMBRALES = [30, 14, 7, 0]
