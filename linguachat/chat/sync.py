# chat/sync.py
import atexit
import logging
import time
from concurrent.futures import ThreadPoolExecutor

from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, transaction

from chat import bridge as chat_bridge
from chat.bridge import BridgeError

logger = logging.getLogger(__name__)

executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="chat-sync")


def cleanup():
    executor.shutdown(wait=False)

atexit.register(cleanup)


class ChatUserSync:
    """
    Best-effort delivery of a user's name and avatar to the chat provider.

    sync() retries a bounded number of times and reports the outcome instead of
    raising; callers never fail because the provider is down.
    """

    def __init__(self, bridge=None, max_attempts=None, retry_delay=None, in_background=None, using=DEFAULT_DB_ALIAS):
        self._bridge = bridge
        self.max_attempts = max_attempts if max_attempts is not None else settings.CHAT_SYNC_MAX_ATTEMPTS
        self.retry_delay = retry_delay if retry_delay is not None else settings.CHAT_SYNC_RETRY_DELAY
        self.in_background = in_background if in_background is not None else settings.CHAT_SYNC_IN_BACKGROUND
        self.using = using

    @property
    def bridge(self):
        return self._bridge or chat_bridge.get_chat_bridge()

    def sync(self, user_id, name, image=""):
        attempts = max(1, self.max_attempts)
        for attempt in range(1, attempts + 1):
            try:
                self.bridge.upsert_external_user(user_id, name, image)
                logger.info(f"Stream user synced for {name}")
                return True
            except BridgeError as e:
                logger.warning(f"Stream sync attempt {attempt}/{attempts} failed for user {user_id}: {e}")
                if attempt < attempts and self.retry_delay:
                    time.sleep(self.retry_delay * attempt)
        logger.error(f"Giving up on Stream sync for user {user_id} after {attempts} attempts")
        return False

    def schedule(self, user):
        # Snapshot now; the row may change before the callback runs.
        args = (str(user.pk), user.full_name, user.profile_pic or "")

        def run():
            if self.in_background:
                executor.submit(self.sync, *args)
            else:
                self.sync(*args)

        transaction.on_commit(run, using=self.using)
