import uuid
from unittest.mock import patch

import pytest

from authentication.models import User
from chat.bridge import BridgeError
from contacts.models import FriendRequest


@pytest.mark.django_db
class TestAuthApi:
    def test_signup_creates_user_and_sets_cookie(self, api_client, fake_bridge, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            response = api_client.post(
                "/api/auth/signup",
                {"email": "nina@example.com", "password": "supersecret", "fullName": "Nina Costa"},
                format="json",
            )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["user"]["fullName"] == "Nina Costa"
        assert body["user"]["isOnboarded"] is False
        assert body["user"]["profilePic"].startswith("https://avatar.iran.liara.run/public/")
        assert "password" not in body["user"]
        assert response.cookies["jwt"].value == body["token"]
        assert response.cookies["jwt"]["httponly"]
        assert fake_bridge.upserts[0]["name"] == "Nina Costa"

    def test_signup_succeeds_while_bridge_is_down(self, api_client, fake_bridge, django_capture_on_commit_callbacks):
        fake_bridge.fail_times = 10

        with django_capture_on_commit_callbacks(execute=True):
            response = api_client.post(
                "/api/auth/signup",
                {"email": "nina@example.com", "password": "supersecret", "fullName": "Nina Costa"},
                format="json",
            )

        assert response.status_code == 201
        assert User.objects.filter(email="nina@example.com").exists()

    @pytest.mark.parametrize("payload, message", [
        ({"email": "nina@example.com", "password": "supersecret"}, "All fields are required"),
        ({"email": "nina@example.com", "password": "short", "fullName": "Nina"}, "Password must be at least 8 characters long"),
        ({"email": "nina-at-example", "password": "supersecret", "fullName": "Nina"}, "Invalid email format"),
    ])
    def test_signup_validation(self, api_client, payload, message):
        response = api_client.post("/api/auth/signup", payload, format="json")

        assert response.status_code == 400
        assert response.json() == {"error": message, "code": "INVALID_INPUT"}

    def test_signup_duplicate_email(self, api_client, alice):
        response = api_client.post(
            "/api/auth/signup",
            {"email": alice.email, "password": "supersecret", "fullName": "Someone Else"},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Email already exists, please use another email"

    def test_signup_duplicate_full_name(self, api_client, alice):
        response = api_client.post(
            "/api/auth/signup",
            {"email": "other@example.com", "password": "supersecret", "fullName": "Alice Smith"},
            format="json",
        )

        assert response.status_code == 409
        assert response.json()["code"] == "CONFLICT"

    def test_login_and_me_with_cookie(self, api_client, alice):
        response = api_client.post("/api/auth/login", {"email": alice.email, "password": "correct-horse"}, format="json")
        assert response.status_code == 200

        me = api_client.get("/api/auth/me")

        assert me.status_code == 200
        assert me.json()["user"]["email"] == alice.email

    @pytest.mark.parametrize("password", ["wrong-password", ""])
    def test_login_rejects_bad_credentials(self, api_client, alice, password):
        response = api_client.post("/api/auth/login", {"email": alice.email, "password": password}, format="json")

        assert response.status_code == 400

    def test_login_unknown_email(self, api_client):
        response = api_client.post("/api/auth/login", {"email": "ghost@example.com", "password": "whatever1"}, format="json")

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid email or password"

    def test_logout_clears_cookie(self, api_client, alice):
        api_client.post("/api/auth/login", {"email": alice.email, "password": "correct-horse"}, format="json")

        response = api_client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.cookies["jwt"].value == ""
        assert api_client.get("/api/auth/me").status_code == 401

    def test_onboarding_missing_fields(self, client_for, make_user):
        user = make_user("Fresh Face", onboarded=False)

        response = client_for(user).post("/api/auth/onboarding", {"fullName": "Fresh Face"}, format="json")

        assert response.status_code == 400
        assert response.json()["missingFields"] == ["bio", "nativeLanguage", "learningLanguage", "location"]

    def test_onboarding_success(self, client_for, make_user):
        user = make_user("Fresh Face", onboarded=False)

        response = client_for(user).post("/api/auth/onboarding", {
            "fullName": "Fresh Face",
            "bio": "Hola",
            "nativeLanguage": "english",
            "learningLanguage": "spanish",
            "location": "Austin",
        }, format="json")

        assert response.status_code == 200
        assert response.json()["message"] == "Profile onboarded successfully"
        assert response.json()["user"]["isOnboarded"] is True


@pytest.mark.django_db
class TestSessionGuard:
    @pytest.mark.parametrize("path", [
        "/api/user/",
        "/api/user/friends",
        "/api/user/friend-requests",
        "/api/user/outgoing-friend-requests",
        "/api/chat/token",
        "/api/auth/me",
    ])
    def test_requires_credentials(self, api_client, path):
        response = api_client.get(path)

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHORIZED"

    def test_rejects_garbage_token(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")

        response = api_client.get("/api/user/")

        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized - Invalid token"

    def test_rejects_token_of_deleted_user(self, client_for, make_user):
        user = make_user("Short Lived")
        client = client_for(user)
        user.delete()

        assert client.get("/api/user/").status_code == 401


@pytest.mark.django_db
class TestFriendsApi:
    def test_full_friendship_flow(self, client_for, alice, bob):
        as_alice, as_bob = client_for(alice), client_for(bob)

        sent = as_alice.post(f"/api/user/friend-request/{bob.id}")
        assert sent.status_code == 201
        request_id = sent.json()["id"]
        assert sent.json()["status"] == "pending"
        assert sent.json()["sender"] == str(alice.id)

        outgoing = as_alice.get("/api/user/outgoing-friend-requests").json()
        assert [req["recipient"]["fullName"] for req in outgoing] == ["Bob Jones"]

        incoming = as_bob.get("/api/user/friend-requests").json()
        assert [req["sender"]["fullName"] for req in incoming["incomingReqs"]] == ["Alice Smith"]
        assert incoming["acceptedReqs"] == []

        accepted = as_bob.put(f"/api/user/friend-request/{request_id}/accept")
        assert accepted.status_code == 200
        assert accepted.json() == {"message": "Friend request accepted"}

        assert as_alice.get("/api/user/outgoing-friend-requests").json() == []
        bob_friends = as_bob.get("/api/user/friends").json()
        assert bob_friends == [{
            "id": str(alice.id),
            "fullName": "Alice Smith",
            "profilePic": alice.profile_pic,
            "nativeLanguage": "english",
            "learningLanguage": "portuguese",
        }]
        alice_view = as_alice.get("/api/user/friend-requests").json()
        assert [req["recipient"]["fullName"] for req in alice_view["acceptedReqs"]] == ["Bob Jones"]

    def test_recommendations_skip_friends(self, client_for, alice, bob, make_user):
        carol = make_user("Carol King")
        alice.friends.add(bob)

        response = client_for(alice).get("/api/user/")

        assert response.status_code == 200
        assert [user["id"] for user in response.json()] == [str(carol.id)]

    def test_self_request(self, client_for, alice):
        response = client_for(alice).post(f"/api/user/friend-request/{alice.id}")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_OPERATION"

    def test_self_request_with_uppercase_id(self, client_for, alice):
        response = client_for(alice).post(f"/api/user/friend-request/{str(alice.id).upper()}")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_OPERATION"
        assert not FriendRequest.objects.exists()

    def test_request_to_unknown_user(self, client_for, alice):
        response = client_for(alice).post(f"/api/user/friend-request/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "Recipient not found"

    def test_crossed_requests_conflict(self, client_for, alice, bob):
        client_for(alice).post(f"/api/user/friend-request/{bob.id}")

        response = client_for(bob).post(f"/api/user/friend-request/{alice.id}")

        assert response.status_code == 409
        assert response.json()["error"] == "A friend request already exists between you and this user"
        assert FriendRequest.objects.count() == 1

    def test_accept_by_sender_forbidden(self, client_for, alice, bob):
        request_id = client_for(alice).post(f"/api/user/friend-request/{bob.id}").json()["id"]

        response = client_for(alice).put(f"/api/user/friend-request/{request_id}/accept")

        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"

    def test_accept_unknown_request(self, client_for, bob):
        response = client_for(bob).put("/api/user/friend-request/not-a-request/accept")

        assert response.status_code == 404

    def test_unexpected_failure_is_generic_500(self, client_for, alice):
        with patch("contacts.services.RelationshipEngine.list_outgoing", side_effect=RuntimeError("db exploded")):
            response = client_for(alice).get("/api/user/outgoing-friend-requests")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal Server Error", "code": "INTERNAL"}


@pytest.mark.django_db
class TestChatTokenApi:
    def test_returns_stream_token(self, client_for, alice):
        response = client_for(alice).get("/api/chat/token")

        assert response.status_code == 200
        assert response.json() == {"token": f"stream-token-{alice.id}"}

    def test_bridge_failure_is_internal(self, client_for, alice, fake_bridge):
        fake_bridge.token_error = BridgeError("Stream API key or secret is missing")

        response = client_for(alice).get("/api/chat/token")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal Server Error", "code": "INTERNAL"}
