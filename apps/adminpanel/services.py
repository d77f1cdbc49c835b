import logging

from apps.notifications.models import FIELD_VERIFIED, RECEIVER_VERIFIED
from apps.notifications.services.create_notifications import notify_user
from apps.users.models import REGISTRATION_VERIFIED, ROLE_FIELD, ROLE_RECEIVER

logger = logging.getLogger(__name__)

VERIFIED_NOTICES = {
    ROLE_RECEIVER: (RECEIVER_VERIFIED, "Your receiver account has been verified by admin."),
    ROLE_FIELD: (FIELD_VERIFIED, "Your field worker account has been verified by admin."),
}


def verify_account(user, actor=None):
    """
    Mark a receiver or field worker as verified so they can submit work.
    """
    user.registration_status = REGISTRATION_VERIFIED
    user.save(update_fields=["registration_status"])
    logger.info("Account %s (%s) verified", user.id, user.role)

    notif_type, message = VERIFIED_NOTICES[user.role]
    notify_user(
        user,
        notif_type,
        "Account Verified",
        message,
        entity_type="user",
        entity_id=user.id,
        actor=actor,
    )
    return user


def set_account_active(user, is_active):
    user.is_active = is_active
    user.save(update_fields=["is_active"])
    logger.info("Account %s %s", user.id, "enabled" if is_active else "disabled")
    return user
