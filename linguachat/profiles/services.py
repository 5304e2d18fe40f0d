# profiles/services.py
import logging

from django.core.exceptions import ValidationError
from django.db import DEFAULT_DB_ALIAS, IntegrityError, transaction

from authentication.models import User
from chat.sync import ChatUserSync
from common.exceptions import Conflict, InvalidInput, NotFound
from profiles.serializers import PUBLIC_PROFILE_FIELDS

logger = logging.getLogger(__name__)

# Request field -> model field, in the order missing fields are reported.
ONBOARDING_FIELDS = (
    ('fullName', 'full_name'),
    ('bio', 'bio'),
    ('nativeLanguage', 'native_language'),
    ('learningLanguage', 'learning_language'),
    ('location', 'location'),
)
OPTIONAL_ONBOARDING_FIELDS = (
    ('profilePic', 'profile_pic'),
)


def _blank(value):
    return not isinstance(value, str) or not value.strip()


class UserDirectory:
    """Reads and onboarding writes over the users table."""

    def __init__(self, using=DEFAULT_DB_ALIAS, chat_sync=None):
        self.using = using
        self.chat_sync = chat_sync or ChatUserSync(using=using)

    @property
    def users(self):
        return User.objects.using(self.using)

    def get_user(self, user_id):
        try:
            return self.users.get(pk=user_id)
        except (User.DoesNotExist, ValidationError, ValueError):
            raise NotFound("User not found")

    def recommend(self, user_id):
        user = self.get_user(user_id)
        return (
            self.users.filter(is_onboarded=True)
            .exclude(pk=user.pk)
            .exclude(pk__in=user.friends.values('pk'))
        )

    def list_friends(self, user_id):
        user = self.get_user(user_id)
        return user.friends.only(*PUBLIC_PROFILE_FIELDS)

    def onboard(self, user_id, attributes):
        missing = [name for name, _ in ONBOARDING_FIELDS if _blank(attributes.get(name))]
        if missing:
            raise InvalidInput("All fields are required", missing_fields=missing)

        user = self.get_user(user_id)
        full_name = attributes['fullName'].strip()
        if self.users.filter(full_name=full_name).exclude(pk=user.pk).exists():
            raise Conflict("Full name is already taken")

        for name, field in ONBOARDING_FIELDS:
            setattr(user, field, attributes[name].strip())
        for name, field in OPTIONAL_ONBOARDING_FIELDS:
            if not _blank(attributes.get(name)):
                setattr(user, field, attributes[name].strip())
        user.is_onboarded = True

        try:
            with transaction.atomic(using=self.using):
                user.save(using=self.using)
        except IntegrityError:
            raise Conflict("Full name is already taken")

        logger.info(f"User {user.pk} onboarded as {user.full_name}")
        self.chat_sync.schedule(user)
        return user


def get_user_directory():
    return UserDirectory()
