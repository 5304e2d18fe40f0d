# contacts/services.py
import logging

from django.core.exceptions import ValidationError
from django.db import DEFAULT_DB_ALIAS, IntegrityError, transaction

from authentication.models import User
from common.exceptions import Conflict, Forbidden, InvalidOperation, NotFound
from .models import FriendRequest
from .notifications import notify_user
from .serializers import IncomingFriendRequestSerializer, FriendRequestSerializer

logger = logging.getLogger(__name__)

REQUEST_EXISTS_MESSAGE = "A friend request already exists between you and this user"


class RelationshipEngine:
    """
    Owns the friend-request lifecycle between two users.

    A request is created pending and moves once to accepted; accepting it adds
    each user to the other's friends in the same transaction. The database is
    reached through ``using`` so callers decide which connection the engine runs on.
    """

    def __init__(self, using=DEFAULT_DB_ALIAS, notifier=None):
        self.using = using
        self.notifier = notifier or notify_user

    @property
    def users(self):
        return User.objects.using(self.using)

    @property
    def requests(self):
        return FriendRequest.objects.using(self.using)

    def _get_user(self, user_id, message):
        try:
            return self.users.get(pk=user_id)
        except (User.DoesNotExist, ValidationError, ValueError):
            raise NotFound(message)

    def _get_request(self, request_id, for_update=False):
        queryset = self.requests.select_for_update() if for_update else self.requests
        try:
            return queryset.get(pk=request_id)
        except (FriendRequest.DoesNotExist, ValidationError, ValueError):
            raise NotFound("Friend request not found")

    def send_request(self, sender_id, recipient_id):
        if str(sender_id) == str(recipient_id):
            raise InvalidOperation("You can't send friend request to yourself")

        recipient = self._get_user(recipient_id, "Recipient not found")
        sender = self._get_user(sender_id, "Sender not found")

        # Ids arrive as strings from the URL; compare the resolved rows too.
        if sender.pk == recipient.pk:
            raise InvalidOperation("You can't send friend request to yourself")

        if recipient.friends.filter(pk=sender.pk).exists():
            raise Conflict("You are already friends with this user")

        if self.requests.between(sender.pk, recipient.pk).exists():
            raise Conflict(REQUEST_EXISTS_MESSAGE)

        try:
            with transaction.atomic(using=self.using):
                friend_request = self.requests.create(sender=sender, recipient=recipient)
        except IntegrityError:
            # Lost the race against a concurrent send for the same pair.
            logger.warning(f"Duplicate friend request rejected by constraint: {sender.pk} <-> {recipient.pk}")
            raise Conflict(REQUEST_EXISTS_MESSAGE)

        logger.info(f"Friend request sent: {sender.pk} -> {recipient.pk}")
        transaction.on_commit(
            lambda: self.notifier(recipient.pk, {
                "type": "friend_request_received",
                "request": IncomingFriendRequestSerializer(friend_request).data,
            }),
            using=self.using,
        )
        return friend_request

    def accept_request(self, request_id, acting_user_id):
        with transaction.atomic(using=self.using):
            friend_request = self._get_request(request_id, for_update=True)

            if str(friend_request.recipient_id) != str(acting_user_id):
                raise Forbidden("You are not authorized to accept this request")

            was_pending = friend_request.is_pending
            friend_request.status = FriendRequest.Status.ACCEPTED
            friend_request.save(using=self.using, update_fields=['status', 'updated_at'])

            # friends is symmetrical: one add writes both directions, and adding an
            # existing friend is a no-op.
            sender = self._get_user(friend_request.sender_id, "Sender not found")
            sender.friends.add(friend_request.recipient_id)

        logger.info(f"Friend request accepted: {friend_request.pk}")
        if was_pending:
            transaction.on_commit(
                lambda: self.notifier(friend_request.sender_id, {
                    "type": "friend_request_accepted",
                    "request": FriendRequestSerializer(friend_request).data,
                }),
                using=self.using,
            )
        return friend_request

    def list_incoming_and_accepted(self, user_id):
        incoming = self.requests.filter(
            recipient_id=user_id, status=FriendRequest.Status.PENDING
        ).select_related('sender')
        accepted = self.requests.filter(
            sender_id=user_id, status=FriendRequest.Status.ACCEPTED
        ).select_related('recipient')
        return incoming, accepted

    def list_outgoing(self, user_id):
        return self.requests.filter(
            sender_id=user_id, status=FriendRequest.Status.PENDING
        ).select_related('recipient')


def get_relationship_engine():
    return RelationshipEngine()
