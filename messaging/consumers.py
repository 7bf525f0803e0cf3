# messaging/consumers.py

# Import json because WebSocket messages are sent as text in JSON format.
import json
import logging
# Import AsyncWebsocketConsumer from channels.generic.websocket because this is the base class for our real-time consumer.
from channels.generic.websocket import AsyncWebsocketConsumer
# Import database_sync_to_async from channels.db because it lets our async code safely talk to the sync database.
from channels.db import database_sync_to_async

from core.exceptions import SupportError
from core.permissions import can
from core.utils import support_room_group
from rooms.utils import get_room
from . import services

logger = logging.getLogger(__name__)

# Close code sent when the user may not join the room
ACCESS_DENIED_CLOSE_CODE = 4403

"""
Author:
This class handles the WebSocket connection for one private
support room. Only the room's student and its claimed supporter
get in. Chat messages sent over the socket go through the same
'append_message' service as the HTTP endpoint, which saves them
and broadcasts them back to the room group.
RT: This entire class is for the real-time support chat.
"""
class SupportChatConsumer(AsyncWebsocketConsumer):
    """
    Runs the moment a participant opens the chat. It checks the
    user may see the room, joins the room's group and tells the
    browser which state the room is in.
    RT: This connects the user to the live support room channel.
    """
    async def connect(self):
        self.user = self.scope.get('user')
        self.room_id = self.scope['url_route']['kwargs']['room_id']
        self.room_group_name = support_room_group(self.room_id)
        self.joined = False

        if self.user is None or not self.user.is_authenticated:
            await self.close()
            return

        room = await self.get_room_if_allowed()
        if room is None:
            await self.close(code=ACCESS_DENIED_CLOSE_CODE)
            return

        await self.channel_layer.group_add(self.room_group_name, self.channel_name)
        self.joined = True
        await self.accept()
        await self.send(text_data=json.dumps({
            'type': 'support_room_joined',
            'room_id': room.pk,
            'topic': room.topic,
            'status': room.status,
        }))

    async def disconnect(self, close_code):
        if self.joined:
            await self.channel_layer.group_discard(self.room_group_name, self.channel_name)

    """
    Runs every time the browser sends something: either a
    "typing" notification or an actual "chat_message". The sender
    is always the logged-in user, never whatever the browser says.
    RT: This receives live messages and "typing" notifications.
    """
    async def receive(self, text_data=None, bytes_data=None):
        try:
            data = json.loads(text_data or '{}')
        except ValueError:
            await self.send_error('Invalid message format')
            return
        if not isinstance(data, dict):
            await self.send_error('Invalid message format')
            return
        message_type = data.get('type', 'chat_message')

        if message_type == 'typing':
            await self.channel_layer.group_send(
                self.room_group_name,
                {
                    'type': 'typing_indicator',
                    'sender_id': self.user.pk,
                    'sender_name': self.user.public_name,
                }
            )

        elif message_type == 'chat_message':
            try:
                # The service saves the message and broadcasts it to the group
                await self.append_message(data.get('message', ''), data.get('kind', 'text'))
            except SupportError as e:
                await self.send_error(e.message)

        else:
            await self.send_error(f'Unknown message type: {message_type}')

    async def send_error(self, message):
        await self.send(text_data=json.dumps({'type': 'error', 'message': message}))

    # --- Group event handlers ---

    async def chat_message(self, event):
        await self.send(text_data=json.dumps({'type': 'chat_message', 'message': event['message']}))

    async def typing_indicator(self, event):
        await self.send(text_data=json.dumps({
            'type': 'typing',
            'sender_id': event['sender_id'],
            'sender_name': event.get('sender_name'),
        }))

    async def room_status(self, event):
        await self.send(text_data=json.dumps(event))

    async def message_edited(self, event):
        await self.send(text_data=json.dumps(event))

    async def message_deleted(self, event):
        await self.send(text_data=json.dumps(event))

    async def messages_read(self, event):
        await self.send(text_data=json.dumps(event))

    # --- Database helpers ---

    @database_sync_to_async
    def get_room_if_allowed(self):
        try:
            room = get_room(self.room_id)
        except SupportError:
            return None
        return room if can(self.user, room, 'room.view') else None

    @database_sync_to_async
    def append_message(self, content, kind):
        kind = kind if kind in ('text', 'emoji') else 'text'
        return services.append_message(self.user, self.room_id, content, kind)
