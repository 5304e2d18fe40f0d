# contacts/models.py
import uuid

from django.conf import settings
from django.db import models
from django.db.models import F, Q


def canonical_pair(user_a_id, user_b_id):
    """Order two user ids so (a, b) and (b, a) map to the same key."""
    return tuple(sorted((user_a_id, user_b_id), key=str))


class FriendRequestQuerySet(models.QuerySet):
    def between(self, user_a_id, user_b_id):
        low, high = canonical_pair(user_a_id, user_b_id)
        return self.filter(user_low_id=low, user_high_id=high)


class FriendRequest(models.Model):
    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        ACCEPTED = 'accepted', 'Accepted'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="sent_requests")
    recipient = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="received_requests")
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDING)
    # Sender and recipient in canonical order; the unique constraint below is what
    # keeps one request per unordered pair when two sends race.
    user_low = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="+", editable=False)
    user_high = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="+", editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = FriendRequestQuerySet.as_manager()

    class Meta:
        constraints = [
            models.CheckConstraint(condition=~Q(sender=F('recipient')), name='friend_request_not_self'),
            models.UniqueConstraint(fields=['user_low', 'user_high'], name='friend_request_unique_pair'),
        ]
        indexes = [
            models.Index(fields=['recipient', 'status'], name='friend_req_recipient_idx'),
            models.Index(fields=['sender', 'status'], name='friend_req_sender_idx'),
        ]
        ordering = ['-created_at']

    def save(self, *args, **kwargs):
        self.user_low_id, self.user_high_id = canonical_pair(self.sender_id, self.recipient_id)
        super().save(*args, **kwargs)

    @property
    def is_pending(self):
        return self.status == self.Status.PENDING

    def __str__(self):
        return f"{self.sender_id} -> {self.recipient_id} ({self.status})"
