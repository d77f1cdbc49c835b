import os
import tempfile

os.environ.setdefault("JWT_SECRET", "test-signing-secret-that-is-long-enough-0123456789")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_NAME", ":memory:")
os.environ.setdefault("UPLOADS_ROOT", tempfile.mkdtemp(prefix="donateflow-uploads-"))

from DonateFlow.settings import *  # noqa: E402,F401,F403

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

REST_FRAMEWORK = {
    **REST_FRAMEWORK,  # noqa: F405
    "DEFAULT_THROTTLE_CLASSES": (),
}

PAYPAL_CLIENT_ID = "test-client-id"
PAYPAL_CLIENT_SECRET = "test-client-secret"
