import json
import logging

from channels.generic.websocket import AsyncWebsocketConsumer

from apps.notifications.services.create_notifications import user_group

logger = logging.getLogger(__name__)


class NotificationConsumer(AsyncWebsocketConsumer):
    """
    Read-only stream of the connected user's notifications.
    """

    async def connect(self):
        # Lazy import to avoid AppRegistryNotReady
        from apps.users.models import User

        user = self.scope.get("user")
        if not isinstance(user, User):
            await self.close()
            return

        self.group_name = user_group(user.id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        logger.debug("Notification socket opened for user %s", user.id)

    async def disconnect(self, close_code):
        group_name = getattr(self, "group_name", None)
        if group_name:
            await self.channel_layer.group_discard(group_name, self.channel_name)

    async def send_notification(self, event):
        payload = {key: value for key, value in event.items() if key != "type"}
        await self.send(text_data=json.dumps(payload))
