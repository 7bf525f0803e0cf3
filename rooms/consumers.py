# rooms/consumers.py

# Import json because WebSocket messages are sent as text in JSON format.
import json
# Import AsyncWebsocketConsumer from channels.generic.websocket because this is the base class for our real-time consumer.
from channels.generic.websocket import AsyncWebsocketConsumer

from core.utils import SUPPORTERS_GROUP_NAME, user_group

"""
Author:
This class handles the main WebSocket connection for each user.
Everyone gets their personal notifications (like "a supporter
joined your room"). Supporters are also added to the shared
supporters group, so the waiting queue refreshes live and
crisis alerts pop up the moment they are raised.
RT: This entire class handles real-time notifications.
"""
class NotificationConsumer(AsyncWebsocketConsumer):
    """
    Runs when a user first connects to the site (opens a tab).
    Anonymous connections are closed straight away.
    RT: Connects the user to their notification channels.
    """
    async def connect(self):
        self.groups_joined = []
        user = self.scope.get('user')
        if user is None or not user.is_authenticated:
            await self.close()
            return

        self.user = user
        self.groups_joined.append(user_group(user.pk))
        if user.is_supporter:
            self.groups_joined.append(SUPPORTERS_GROUP_NAME)

        for group_name in self.groups_joined:
            await self.channel_layer.group_add(group_name, self.channel_name)
        await self.accept()

    async def disconnect(self, close_code):
        for group_name in self.groups_joined:
            await self.channel_layer.group_discard(group_name, self.channel_name)

    # Personal notification for this user
    async def send_notification(self, event):
        await self.send(text_data=json.dumps({'type': 'notification', 'message': event['message']}))

    # A room was created or claimed; supporters refresh their queue
    async def queue_update(self, event):
        await self.send(text_data=json.dumps(event))

    # RT: Pushes a crisis alert to every connected supporter
    async def crisis_alert(self, event):
        await self.send(text_data=json.dumps({'type': 'crisis_alert', 'alert': event['alert']}))
