# authentication/views.py
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated

from authentication import services
from authentication.serializers import UserSerializer
from authentication.tokens import issue_access_token, set_token_cookie, clear_token_cookie
from profiles.services import get_user_directory


class SignupView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        data = request.data
        user = services.get_account_service().signup(
            data.get('email'), data.get('password'), data.get('fullName')
        )
        token = issue_access_token(user)
        response = Response(
            {"success": True, "user": UserSerializer(user).data, "token": token, "message": "User created successfully"},
            status=status.HTTP_201_CREATED,
        )
        return set_token_cookie(response, token)


class LoginView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        user = services.get_account_service().authenticate(request.data.get('email'), request.data.get('password'))
        token = issue_access_token(user)
        response = Response(
            {"success": True, "user": UserSerializer(user).data, "token": token, "message": "User logged in successfully"},
            status=status.HTTP_200_OK,
        )
        return set_token_cookie(response, token)


class LogoutView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        response = Response({"success": True, "message": "User logged out successfully"})
        return clear_token_cookie(response)


class OnboardView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        user = get_user_directory().onboard(request.user.id, request.data)
        return Response({"message": "Profile onboarded successfully", "user": UserSerializer(user).data})


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({"success": True, "user": UserSerializer(request.user).data})
