# contacts/notifications.py
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)


def user_group(user_id):
    return f"user_{user_id}"


def notify_user(user_id, event):
    """Push an event to every socket the user has open. Delivery is best-effort."""
    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.warning("Channel layer not available")
        return False
    try:
        async_to_sync(channel_layer.group_send)(user_group(user_id), event)
    except Exception as e:
        logger.warning(f"Failed to notify user {user_id} of {event.get('type')}: {e}")
        return False
    return True
