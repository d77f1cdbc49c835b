import os
from pathlib import Path

from dotenv import load_dotenv

from DonateFlow.env import load_env

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")
ENV = load_env()

SECRET_KEY = ENV["JWT_SECRET"]
APP_ENV = ENV["APP_ENV"]
DEBUG = APP_ENV != "production"

ALLOWED_HOSTS = ["*"]

INSTALLED_APPS = [
    "daphne",
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    "corsheaders",
    "rest_framework",
    "rest_framework_simplejwt",
    "django_filters",
    "drf_spectacular",
    "channels",

    "apps.users",
    "apps.adminpanel",
    "apps.projects",
    "apps.donations",
    "apps.progress",
    "apps.notifications",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "DonateFlow.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "DonateFlow.wsgi.application"
ASGI_APPLICATION = "DonateFlow.asgi.application"


# Database

if ENV["DATABASE_ENGINE"] == "django.db.backends.sqlite3":
    DATABASES = {
        "default": {
            "ENGINE": ENV["DATABASE_ENGINE"],
            "NAME": ENV["DATABASE_NAME"] or BASE_DIR / "db.sqlite3",
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": ENV["DATABASE_ENGINE"],
            "NAME": ENV["DATABASE_NAME"],
            "USER": ENV["DATABASE_USER"],
            "PASSWORD": ENV["DATABASE_PASSWORD"],
            "HOST": ENV["DATABASE_HOST"],
            "PORT": ENV["DATABASE_PORT"],
        }
    }

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
AUTH_USER_MODEL = "users.User"

AUTH_PASSWORD_VALIDATORS = []

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# Uploaded files live under one root, one sub-directory per purpose
MEDIA_URL = "/uploads/"
MEDIA_ROOT = Path(ENV["UPLOADS_ROOT"]) if ENV["UPLOADS_ROOT"] else BASE_DIR / "uploads"

DATA_UPLOAD_MAX_MEMORY_SIZE = 2 * 1024 * 1024


# CORS

CORS_ALLOWED_ORIGINS = list(dict.fromkeys([
    ENV["CLIENT_ORIGIN"],
    "http://127.0.0.1:8080",
    "http://localhost:8080",
]))
CORS_ALLOW_CREDENTIALS = True


# REST framework

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "apps.users.authentication.RoleJWTAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.IsAuthenticated",
    ),
    "DEFAULT_FILTER_BACKENDS": (
        "django_filters.rest_framework.DjangoFilterBackend",
    ),
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "EXCEPTION_HANDLER": "apps.cores.exceptions.flat_exception_handler",
    "COERCE_DECIMAL_TO_STRING": False,
    "DEFAULT_THROTTLE_CLASSES": (
        "rest_framework.throttling.AnonRateThrottle",
        "rest_framework.throttling.UserRateThrottle",
    ),
    "DEFAULT_THROTTLE_RATES": {
        "anon": "1200/hour",
        "user": "1200/hour",
    },
}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": ENV["JWT_EXPIRES_IN"],
    "REFRESH_TOKEN_LIFETIME": ENV["JWT_EXPIRES_IN"] * 2,
    "SIGNING_KEY": ENV["JWT_SECRET"],
    "ALGORITHM": "HS256",
    "AUTH_HEADER_TYPES": ("Bearer",),
    "USER_ID_FIELD": "id",
    "USER_ID_CLAIM": "user_id",
    "UPDATE_LAST_LOGIN": False,
}

SPECTACULAR_SETTINGS = {
    "TITLE": "DonateFlow API",
    "DESCRIPTION": "Donation tracking: requests, donations, field progress and approvals.",
    "VERSION": "1.0.0",
}


# Channels

CHANNEL_LAYERS = {
    "default": {
        "BACKEND": "channels.layers.InMemoryChannelLayer",
    },
}


# Payment gateway

PAYPAL_MODE = ENV["PAYPAL_MODE"]
PAYPAL_CLIENT_ID = ENV["PAYPAL_CLIENT_ID"]
PAYPAL_CLIENT_SECRET = ENV["PAYPAL_CLIENT_SECRET"]
PAYPAL_TIMEOUT = ENV["PAYPAL_TIMEOUT"]
PAYPAL_DEFAULT_CURRENCY = "USD"


# Seeding

PORTAL_ADMIN_USERNAME = ENV["PORTAL_ADMIN_USERNAME"]
PORTAL_ADMIN_PASSWORD = ENV["PORTAL_ADMIN_PASSWORD"]


# Logging

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": os.getenv("DJANGO_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "apps": {
            "handlers": ["console"],
            "level": "DEBUG" if APP_ENV == "development" else "INFO",
            "propagate": False,
        },
    },
}
