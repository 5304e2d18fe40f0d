import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from authentication.models import User
from chat import bridge as chat_bridge


class FakeBridge:
    """Records calls instead of talking to Stream."""

    def __init__(self):
        self.upserts = []
        self.fail_times = 0
        self.token_error = None

    def upsert_external_user(self, user_id, name, image=""):
        if self.fail_times:
            self.fail_times -= 1
            raise chat_bridge.BridgeError("Stream unavailable")
        user_data = {"id": str(user_id), "name": name, "image": image}
        self.upserts.append(user_data)
        return user_data

    def mint_token(self, user_id):
        if self.token_error:
            raise self.token_error
        return f"stream-token-{user_id}"


@pytest.fixture(autouse=True)
def test_settings(settings):
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']
    settings.CHAT_SYNC_IN_BACKGROUND = False
    settings.CHAT_SYNC_RETRY_DELAY = 0
    settings.CHAT_SYNC_MAX_ATTEMPTS = 3
    settings.CHANNEL_LAYERS = {'default': {'BACKEND': 'channels.layers.InMemoryChannelLayer'}}
    return settings


@pytest.fixture(autouse=True)
def fake_bridge(monkeypatch):
    bridge = FakeBridge()
    monkeypatch.setattr(chat_bridge, "_bridge", bridge)
    return bridge


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(full_name=None, onboarded=True, **extra):
        counter["n"] += 1
        full_name = full_name or f"Learner {counter['n']}"
        email = extra.pop("email", f"{full_name.lower().replace(' ', '.')}@example.com")
        defaults = {
            "bio": "Learning every day",
            "native_language": "english",
            "learning_language": "spanish",
            "location": "Lisbon",
            "profile_pic": f"https://avatar.iran.liara.run/public/{counter['n']}.png",
        } if onboarded else {}
        defaults.update(extra)
        return User.objects.create_user(
            email=email,
            password="correct-horse",
            full_name=full_name,
            is_onboarded=onboarded,
            **defaults,
        )

    return _make_user


@pytest.fixture
def alice(make_user):
    return make_user("Alice Smith", native_language="english", learning_language="portuguese")


@pytest.fixture
def bob(make_user):
    return make_user("Bob Jones", native_language="portuguese", learning_language="english")


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for():
    def _client_for(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(user)}")
        return client

    return _client_for
