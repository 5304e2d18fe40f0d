# chat/bridge.py
import logging

from django.conf import settings
from stream_chat import StreamChat

logger = logging.getLogger(__name__)


class BridgeError(Exception):
    """The chat/video provider could not be reached or rejected the call."""


class ChatBridge:
    """Keeps Stream's user registry in step with ours and mints Stream tokens."""

    def __init__(self, api_key, api_secret, client=None):
        self.api_key = api_key
        self.api_secret = api_secret
        self._client = client

    @property
    def client(self):
        if self._client is None:
            if not self.api_key or not self.api_secret:
                raise BridgeError("Stream API key or secret is missing")
            self._client = StreamChat(api_key=self.api_key, api_secret=self.api_secret)
        return self._client

    def upsert_external_user(self, user_id, name, image=""):
        user_data = {"id": str(user_id), "name": name, "image": image or ""}
        client = self.client
        try:
            client.upsert_users([user_data])
        except Exception as e:
            raise BridgeError(f"Error upserting Stream user {user_id}: {e}") from e
        return user_data

    def mint_token(self, user_id):
        client = self.client
        try:
            return client.create_token(str(user_id))
        except Exception as e:
            raise BridgeError(f"Error generating Stream token for {user_id}: {e}") from e


_bridge = None


def get_chat_bridge():
    global _bridge
    if _bridge is None:
        if not settings.STREAM_API_KEY or not settings.STREAM_API_SECRET:
            logger.error("Stream API Key or Secret is missing")
        _bridge = ChatBridge(settings.STREAM_API_KEY, settings.STREAM_API_SECRET)
    return _bridge
