# profiles/views.py
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from profiles import services
from profiles.serializers import PublicProfileSerializer, RecommendedUserSerializer


class RecommendedUsersView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        users = services.get_user_directory().recommend(request.user.id)
        return Response(RecommendedUserSerializer(users, many=True).data)


class MyFriendsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        friends = services.get_user_directory().list_friends(request.user.id)
        return Response(PublicProfileSerializer(friends, many=True).data)
