# contacts/serializers.py
from rest_framework import serializers
from .models import FriendRequest
from profiles.serializers import PublicProfileSerializer
from authentication.models import User


class FriendRequestSerializer(serializers.ModelSerializer):
    sender = serializers.PrimaryKeyRelatedField(read_only=True, pk_field=serializers.UUIDField(format='hex_verbose'))
    recipient = serializers.PrimaryKeyRelatedField(read_only=True, pk_field=serializers.UUIDField(format='hex_verbose'))
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = FriendRequest
        fields = ['id', 'sender', 'recipient', 'status', 'createdAt', 'updatedAt']


class IncomingFriendRequestSerializer(FriendRequestSerializer):
    sender = PublicProfileSerializer(read_only=True)


class OutgoingFriendRequestSerializer(FriendRequestSerializer):
    recipient = PublicProfileSerializer(read_only=True)


class AcceptedRecipientSerializer(serializers.ModelSerializer):
    fullName = serializers.CharField(source='full_name', read_only=True)
    profilePic = serializers.CharField(source='profile_pic', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'fullName', 'profilePic']


class AcceptedFriendRequestSerializer(FriendRequestSerializer):
    recipient = AcceptedRecipientSerializer(read_only=True)
