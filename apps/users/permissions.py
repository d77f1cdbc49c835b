from rest_framework.exceptions import NotAuthenticated
from rest_framework.permissions import BasePermission

from .models import ROLE_ADMIN, ROLE_DONOR, ROLE_FIELD, ROLE_RECEIVER, User


class HasRole(BasePermission):
    roles = ()
    message = "Forbidden"

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and getattr(user, "role", None) in self.roles
        )


class IsAdmin(HasRole):
    roles = (ROLE_ADMIN,)


class IsDonor(HasRole):
    roles = (ROLE_DONOR,)


class IsReceiver(HasRole):
    roles = (ROLE_RECEIVER,)


class IsFieldWorker(HasRole):
    roles = (ROLE_FIELD,)


class HasUserAccount(BasePermission):
    """
    The request must come from an email account, not a portal credential.
    """

    def has_permission(self, request, view):
        if not isinstance(request.user, User):
            raise NotAuthenticated("Unauthorized")
        return True


class IsVerifiedAccount(BasePermission):
    """
    Receivers and field workers act only after an admin verified them.
    """
    message = "Account pending admin verification"

    def has_permission(self, request, view):
        return bool(getattr(request.user, "is_verified", False))
