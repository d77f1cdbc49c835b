from django.utils.functional import cached_property
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed
from rest_framework_simplejwt.models import TokenUser
from rest_framework_simplejwt.settings import api_settings

from .models import PortalCredential


class PortalUser(TokenUser):
    """
    Stateless principal behind a portal-credential token.
    """
    is_portal = True
    registration_status = ""
    is_verified = False

    @cached_property
    def role(self):
        return self.token.get("role", "")

    def __str__(self):
        return f"PortalUser {self.id} ({self.role})"


class RoleJWTAuthentication(JWTAuthentication):
    """
    Bearer-token auth for both email accounts and portal credentials.
    """

    def get_user(self, validated_token):
        if not validated_token.get("portal"):
            return super().get_user(validated_token)

        credential_id = validated_token.get(api_settings.USER_ID_CLAIM)
        active = PortalCredential.objects.filter(pk=credential_id, is_active=True).exists()
        if not active:
            raise AuthenticationFailed("Unauthorized", code="credential_not_found")

        return PortalUser(validated_token)


def resolve_raw_token(raw_token):
    """Validate a raw token string and return its principal."""
    authentication = RoleJWTAuthentication()
    validated_token = authentication.get_validated_token(raw_token)
    return authentication.get_user(validated_token)


class StatelessRoleJWTAuthentication(RoleJWTAuthentication):
    """
    Same tokens, but email accounts are not loaded here. Views using it
    resolve the account themselves, so a vanished account reads as 404.
    """

    def get_user(self, validated_token):
        if validated_token.get("portal"):
            return super().get_user(validated_token)
        return TokenUser(validated_token)
