# authentication/services.py
import logging
import random
import re

from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, IntegrityError, transaction

from authentication.models import User
from chat.sync import ChatUserSync
from common.exceptions import Conflict, InvalidInput

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
MIN_PASSWORD_LENGTH = 8
AVATAR_COUNT = 100


def random_avatar_url():
    index = random.randint(1, AVATAR_COUNT)
    return settings.AVATAR_URL_TEMPLATE.format(index=index)


class AccountService:
    def __init__(self, using=DEFAULT_DB_ALIAS, chat_sync=None):
        self.using = using
        self.chat_sync = chat_sync or ChatUserSync(using=using)

    @property
    def users(self):
        return User.objects.db_manager(self.using)

    def signup(self, email, password, full_name):
        if not all(isinstance(value, str) and value for value in (email, password, full_name)):
            raise InvalidInput("All fields are required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidInput(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        if not EMAIL_RE.match(email):
            raise InvalidInput("Invalid email format")

        if self.users.filter(email__iexact=email).exists():
            raise InvalidInput("Email already exists, please use another email")
        if self.users.filter(full_name=full_name).exists():
            raise Conflict("Full name is already taken")

        try:
            with transaction.atomic(using=self.using):
                user = self.users.create_user(
                    email=email,
                    password=password,
                    full_name=full_name,
                    profile_pic=random_avatar_url(),
                )
        except IntegrityError:
            raise Conflict("Email or full name is already taken")

        logger.info(f"New user signed up: {user.email} with ID: {user.pk}")
        self.chat_sync.schedule(user)
        return user

    def authenticate(self, email, password):
        if not all(isinstance(value, str) and value for value in (email, password)):
            raise InvalidInput("All fields are required")

        user = self.users.filter(email__iexact=email).first()
        if user is None or not user.check_password(password):
            raise InvalidInput("Invalid email or password")
        if not user.is_active:
            raise InvalidInput("Invalid email or password")
        return user


def get_account_service():
    return AccountService()
