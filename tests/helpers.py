from django.core.files.uploadedfile import SimpleUploadedFile

from apps.users.models import User
from apps.users.tokens import tokens_for_portal_credential, tokens_for_user

PASSWORD = "secret123"


def bearer(client, principal):
    """Authenticate `client` as a User or a PortalCredential."""
    if isinstance(principal, User):
        tokens = tokens_for_user(principal)
    else:
        tokens = tokens_for_portal_credential(principal)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
    return client


def upload(name="proof.png", content=b"\x89PNG\r\n\x1a\nfake-image-bytes"):
    return SimpleUploadedFile(name, content, content_type="image/png")
