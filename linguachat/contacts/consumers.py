import json
import logging
import uuid
from urllib.parse import parse_qs

from channels.generic.websocket import AsyncWebsocketConsumer
from channels.db import database_sync_to_async
from django.contrib.auth import get_user_model
from rest_framework_simplejwt.tokens import AccessToken
from rest_framework_simplejwt.exceptions import TokenError

from common.exceptions import LinguaChatError
from .notifications import user_group
from .serializers import FriendRequestSerializer
from . import services

User = get_user_model()
logger = logging.getLogger(__name__)


class ContactConsumer(AsyncWebsocketConsumer):
    """Live friend-request events for one user, plus send/accept over the socket."""

    async def connect(self):
        self.group_name = None
        query = parse_qs(self.scope['query_string'].decode())
        token = query.get('token', [None])[0]
        if not token:
            logger.warning("No token provided in WebSocket connection")
            await self.close(code=4001)
            return

        try:
            user_id = AccessToken(token)['user_id']
            self.user = await database_sync_to_async(User.objects.get)(id=user_id)
        except (TokenError, KeyError, User.DoesNotExist) as e:
            logger.warning(f"Token validation error: {str(e)}")
            await self.close(code=4003)
            return

        if not self.user.is_active:
            await self.close(code=4002)
            return

        self.group_name = user_group(self.user.id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        logger.info(f"Contacts socket connected for user {self.user.id}")

    async def disconnect(self, close_code):
        if self.group_name:
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def receive(self, text_data=None, bytes_data=None):
        try:
            data = json.loads(text_data or '')
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in WebSocket message: {str(e)}")
            await self.send_error("Invalid message")
            return

        if not isinstance(data, dict):
            await self.send_error("Invalid message")
            return

        message_type = data.get('type')
        try:
            if message_type == 'friend_request':
                request_data = await self.send_friend_request(data.get('recipientId'))
                await self.send(text_data=json.dumps({
                    "type": "friend_request_sent",
                    "event_id": str(uuid.uuid4()),
                    "request": request_data,
                }))
            elif message_type == 'friend_request_accepted':
                await self.accept_friend_request(data.get('requestId'))
            else:
                await self.send_error(f"Unknown message type: {message_type}")
        except LinguaChatError as e:
            await self.send_error(e.message)

    @database_sync_to_async
    def send_friend_request(self, recipient_id):
        friend_request = services.get_relationship_engine().send_request(self.user.id, recipient_id)
        return FriendRequestSerializer(friend_request).data

    @database_sync_to_async
    def accept_friend_request(self, request_id):
        services.get_relationship_engine().accept_request(request_id, self.user.id)

    async def send_error(self, message):
        await self.send(text_data=json.dumps({
            "type": "error",
            "event_id": str(uuid.uuid4()),
            "message": message,
        }))

    async def friend_request_received(self, event):
        await self.send(text_data=json.dumps(event))

    async def friend_request_accepted(self, event):
        await self.send(text_data=json.dumps(event))
