import json

from channels.generic.websocket import AsyncWebsocketConsumer

from .notifications import notification_group_name


class NotificationConsumer(AsyncWebsocketConsumer):
    """WebSocket consumer for real-time match notifications"""

    async def connect(self):
        self.user = self.scope["user"]

        if self.user.is_anonymous:
            await self.close(code=4001)
            return

        # Join user's personal notification group
        self.notification_group_name = notification_group_name(self.user.id)

        await self.channel_layer.group_add(
            self.notification_group_name,
            self.channel_name
        )

        await self.accept()

    async def disconnect(self, close_code):
        if hasattr(self, 'notification_group_name'):
            await self.channel_layer.group_discard(
                self.notification_group_name,
                self.channel_name
            )

    # Handler for notification messages
    async def send_notification(self, event):
        """Send notification to WebSocket"""
        await self.send(text_data=json.dumps({
            'type': 'notification',
            'notification': event['notification']
        }))
