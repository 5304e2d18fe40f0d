from rest_framework import serializers
from authentication.models import User


class UserSerializer(serializers.ModelSerializer):
    fullName = serializers.CharField(source='full_name', read_only=True)
    profilePic = serializers.CharField(source='profile_pic', read_only=True)
    nativeLanguage = serializers.CharField(source='native_language', read_only=True)
    learningLanguage = serializers.CharField(source='learning_language', read_only=True)
    isOnboarded = serializers.BooleanField(source='is_onboarded', read_only=True)
    friends = serializers.PrimaryKeyRelatedField(many=True, read_only=True, pk_field=serializers.UUIDField(format='hex_verbose'))
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'email', 'fullName', 'bio', 'profilePic', 'nativeLanguage',
            'learningLanguage', 'location', 'isOnboarded', 'friends', 'createdAt', 'updatedAt',
        ]
