# contacts/views.py
import logging

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated

from contacts import services
from .serializers import (
    FriendRequestSerializer, IncomingFriendRequestSerializer,
    AcceptedFriendRequestSerializer, OutgoingFriendRequestSerializer,
)

logger = logging.getLogger(__name__)


class SendFriendRequestView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, recipient_id):
        friend_request = services.get_relationship_engine().send_request(request.user.id, recipient_id)
        return Response(FriendRequestSerializer(friend_request).data, status=status.HTTP_201_CREATED)


class AcceptFriendRequestView(APIView):
    permission_classes = [IsAuthenticated]

    def put(self, request, request_id):
        services.get_relationship_engine().accept_request(request_id, request.user.id)
        return Response({"message": "Friend request accepted"}, status=status.HTTP_200_OK)


class GetFriendRequestsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        incoming, accepted = services.get_relationship_engine().list_incoming_and_accepted(request.user.id)
        return Response({
            "incomingReqs": IncomingFriendRequestSerializer(incoming, many=True).data,
            "acceptedReqs": AcceptedFriendRequestSerializer(accepted, many=True).data,
        })


class OutgoingFriendRequestsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        outgoing = services.get_relationship_engine().list_outgoing(request.user.id)
        return Response(OutgoingFriendRequestSerializer(outgoing, many=True).data)
