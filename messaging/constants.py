# messaging/constants.py

"""
Author:
Simple, reusable values for the 'messaging' app.
"""
# Length of the room's 'last_message_preview'
PREVIEW_LENGTH = 100

# Event types pushed over the room's WebSocket group
EVENT_CHAT_MESSAGE = 'chat_message'
EVENT_MESSAGE_EDITED = 'message_edited'
EVENT_MESSAGE_DELETED = 'message_deleted'
EVENT_MESSAGES_READ = 'messages_read'
