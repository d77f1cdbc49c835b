from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import RefreshToken


def tokens_for_user(user):
    """
    Access/refresh pair for an email account. The role claim is copied into
    the access token by simplejwt.
    """
    refresh = RefreshToken.for_user(user)
    refresh["role"] = user.role
    return {
        "refresh": str(refresh),
        "access": str(refresh.access_token),
    }


def tokens_for_portal_credential(credential):
    """
    Portal logins have no User row; the subject is the credential id and
    the role is the portal it belongs to.
    """
    refresh = RefreshToken()
    refresh[api_settings.USER_ID_CLAIM] = credential.id
    refresh["role"] = credential.portal_key
    refresh["portal"] = True
    return {
        "refresh": str(refresh),
        "access": str(refresh.access_token),
    }
