import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.contrib.auth import get_user_model
from django.db import transaction

from apps.notifications.models import Notification

logger = logging.getLogger(__name__)


def user_group(user_id):
    return f"user_{user_id}"


class BestEffortNotifier:
    """
    Stores a notification and pushes it to the recipient's websocket group.

    `send` never raises: a failed write or push is logged and dropped so the
    workflow step that triggered it always completes. Returns the stored
    notification, or None when it could not be written.
    """

    def send(
        self,
        recipient,
        notif_type,
        title,
        message="",
        *,
        entity_type="",
        entity_id="",
        actor=None,
        data=None,
    ) -> Notification | None:
        # portal principals have no User row to point at
        if actor is not None and not isinstance(actor, get_user_model()):
            actor = None

        try:
            # savepoint: a failed insert must not poison the caller's transaction
            with transaction.atomic():
                notif = Notification.objects.create(
                    recipient=recipient,
                    recipient_role=recipient.role,
                    notif_type=notif_type,
                    title=title,
                    message=message,
                    entity_type=entity_type,
                    entity_id=str(entity_id) if entity_id else "",
                    actor=actor,
                    data=data,
                )
        except Exception:
            logger.warning(
                "Could not store %s notification for user %s",
                notif_type, getattr(recipient, "pk", None),
                exc_info=True,
            )
            return None

        try:
            self.push(notif)
        except Exception:
            logger.warning("Could not push notification %s", notif.pk, exc_info=True)

        return notif

    def push(self, notif):
        channel_layer = get_channel_layer()
        if channel_layer is None:
            return

        async_to_sync(channel_layer.group_send)(
            user_group(notif.recipient_id),
            {
                "type": "send_notification",
                "id": notif.id,
                "notif_type": notif.notif_type,
                "title": notif.title,
                "message": notif.message,
                "entity_type": notif.entity_type,
                "entity_id": notif.entity_id,
                "data": notif.data,
                "created_at": notif.created_at.isoformat(),
                "read_at": None,
            },
        )


notifier = BestEffortNotifier()


def notify_user(recipient, notif_type, title, message="", **kwargs):
    return notifier.send(recipient, notif_type, title, message, **kwargs)
