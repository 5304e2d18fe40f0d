import uuid

import pytest

from chat.sync import ChatUserSync
from common.exceptions import Conflict, InvalidInput, NotFound
from profiles.services import UserDirectory


class RecordingSync:
    def __init__(self):
        self.scheduled = []

    def schedule(self, user):
        self.scheduled.append(user.pk)


@pytest.fixture
def sync():
    return RecordingSync()


@pytest.fixture
def directory(sync):
    return UserDirectory(chat_sync=sync)


def onboarding_payload(**overrides):
    payload = {
        "fullName": "Nina Costa",
        "bio": "Polyglot in training",
        "nativeLanguage": "portuguese",
        "learningLanguage": "japanese",
        "location": "Porto",
    }
    payload.update(overrides)
    return payload


@pytest.mark.django_db
class TestRecommend:
    def test_excludes_self_friends_and_unonboarded(self, directory, alice, bob, make_user):
        carol = make_user("Carol King")
        make_user("Newbie", onboarded=False)
        alice.friends.add(bob)

        recommended = set(directory.recommend(alice.id).values_list('pk', flat=True))

        assert recommended == {carol.pk}

    def test_friendship_excluded_from_both_sides(self, directory, alice, bob):
        alice.friends.add(bob)

        assert list(directory.recommend(bob.id)) == []

    def test_unknown_user(self, directory):
        with pytest.raises(NotFound):
            directory.recommend(uuid.uuid4())


@pytest.mark.django_db
class TestListFriends:
    def test_returns_friend_profiles(self, directory, alice, bob, make_user):
        make_user("Carol King")
        alice.friends.add(bob)

        friends = list(directory.list_friends(alice.id))

        assert [friend.pk for friend in friends] == [bob.pk]
        assert friends[0].full_name == "Bob Jones"
        assert friends[0].native_language == "portuguese"

    def test_no_friends(self, directory, alice):
        assert list(directory.list_friends(alice.id)) == []


@pytest.mark.django_db
class TestOnboard:
    def test_reports_every_missing_field_in_order(self, directory, make_user):
        user = make_user("Fresh Face", onboarded=False)

        with pytest.raises(InvalidInput) as excinfo:
            directory.onboard(user.id, {"fullName": "Fresh Face", "bio": "  "})

        assert excinfo.value.message == "All fields are required"
        assert excinfo.value.missing_fields == ["bio", "nativeLanguage", "learningLanguage", "location"]

    def test_writes_profile_and_flips_flag(self, directory, sync, make_user):
        user = make_user("Fresh Face", onboarded=False)

        updated = directory.onboard(user.id, onboarding_payload(profilePic="https://avatar.iran.liara.run/public/7.png"))

        user.refresh_from_db()
        assert updated.pk == user.pk
        assert user.is_onboarded
        assert user.full_name == "Nina Costa"
        assert user.learning_language == "japanese"
        assert user.location == "Porto"
        assert user.profile_pic == "https://avatar.iran.liara.run/public/7.png"
        assert sync.scheduled == [user.pk]

    def test_ignores_fields_outside_the_profile(self, directory, make_user):
        user = make_user("Fresh Face", onboarded=False)

        directory.onboard(user.id, onboarding_payload(email="hijack@example.com", is_staff=True))

        user.refresh_from_db()
        assert user.email == "fresh.face@example.com"
        assert not user.is_staff

    def test_taken_full_name_conflicts(self, directory, alice, make_user):
        user = make_user("Fresh Face", onboarded=False)

        with pytest.raises(Conflict):
            directory.onboard(user.id, onboarding_payload(fullName="Alice Smith"))

        user.refresh_from_db()
        assert not user.is_onboarded

    def test_unknown_user(self, directory):
        with pytest.raises(NotFound):
            directory.onboard(uuid.uuid4(), onboarding_payload())

    def test_bridge_outage_does_not_fail_onboarding(self, fake_bridge, make_user, django_capture_on_commit_callbacks):
        fake_bridge.fail_times = 10
        directory = UserDirectory(chat_sync=ChatUserSync(max_attempts=2, retry_delay=0, in_background=False))
        user = make_user("Fresh Face", onboarded=False)

        with django_capture_on_commit_callbacks(execute=True):
            directory.onboard(user.id, onboarding_payload())

        user.refresh_from_db()
        assert user.is_onboarded
        assert fake_bridge.upserts == []
        assert fake_bridge.fail_times == 8
