"""
Environment parsing for DonateFlow.

Every variable the project reads is validated here once, at settings import.
A bad value raises ImproperlyConfigured so manage.py / ASGI / WSGI refuse to
start instead of failing on the first request.
"""
import os
import re
from datetime import timedelta
from urllib.parse import urlparse

from django.core.exceptions import ImproperlyConfigured

JWT_SECRET_MIN_LENGTH = 32

APP_ENVIRONMENTS = ("development", "test", "production")
PAYPAL_MODES = ("sandbox", "live")

_DURATION_RE = re.compile(r"^(\d+)\s*([smhd]?)$")
_DURATION_UNITS = {"": "seconds", "s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


def parse_duration(value: str) -> timedelta:
    """
    Parse a token lifetime such as "7d", "12h", "30m", "45s" or "3600".
    """
    match = _DURATION_RE.match(value.strip().lower())
    if not match:
        raise ImproperlyConfigured(f"JWT_EXPIRES_IN: invalid duration {value!r}")
    amount, unit = match.groups()
    if int(amount) <= 0:
        raise ImproperlyConfigured("JWT_EXPIRES_IN: duration must be positive")
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


def _choice(environ, name, choices, default):
    value = environ.get(name) or default
    if value not in choices:
        raise ImproperlyConfigured(f"{name}: expected one of {', '.join(choices)}, got {value!r}")
    return value


def _positive_number(environ, name, default):
    raw = environ.get(name)
    if raw in (None, ""):
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ImproperlyConfigured(f"{name}: expected a number, got {raw!r}")
    if value <= 0:
        raise ImproperlyConfigured(f"{name}: must be positive")
    return value


def _url(environ, name, default):
    value = environ.get(name) or default
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ImproperlyConfigured(f"{name}: invalid url {value!r}")
    return value.rstrip("/")


def load_env(environ=None) -> dict:
    """
    Validate the process environment and return the typed configuration.
    """
    environ = os.environ if environ is None else environ

    jwt_secret = environ.get("JWT_SECRET", "")
    if not jwt_secret:
        raise ImproperlyConfigured("JWT_SECRET: required")
    if len(jwt_secret) < JWT_SECRET_MIN_LENGTH:
        raise ImproperlyConfigured(
            f"JWT_SECRET: must be at least {JWT_SECRET_MIN_LENGTH} characters"
        )

    return {
        "APP_ENV": _choice(environ, "APP_ENV", APP_ENVIRONMENTS, "development"),
        "JWT_SECRET": jwt_secret,
        "JWT_EXPIRES_IN": parse_duration(environ.get("JWT_EXPIRES_IN") or "7d"),
        "CLIENT_ORIGIN": _url(environ, "CLIENT_ORIGIN", "http://localhost:8080"),
        "DATABASE_ENGINE": environ.get("DATABASE_ENGINE") or "django.db.backends.sqlite3",
        "DATABASE_NAME": environ.get("DATABASE_NAME") or "",
        "DATABASE_USER": environ.get("DATABASE_USER") or "",
        "DATABASE_PASSWORD": environ.get("DATABASE_PASSWORD") or "",
        "DATABASE_HOST": environ.get("DATABASE_HOST") or "",
        "DATABASE_PORT": environ.get("DATABASE_PORT") or "",
        "PAYPAL_MODE": _choice(environ, "PAYPAL_MODE", PAYPAL_MODES, "sandbox"),
        "PAYPAL_CLIENT_ID": environ.get("PAYPAL_CLIENT_ID") or "",
        "PAYPAL_CLIENT_SECRET": environ.get("PAYPAL_CLIENT_SECRET") or "",
        "PAYPAL_TIMEOUT": _positive_number(environ, "PAYPAL_TIMEOUT", 30.0),
        "UPLOADS_ROOT": environ.get("UPLOADS_ROOT") or "",
        "PORTAL_ADMIN_USERNAME": environ.get("PORTAL_ADMIN_USERNAME") or "",
        "PORTAL_ADMIN_PASSWORD": environ.get("PORTAL_ADMIN_PASSWORD") or "",
    }
