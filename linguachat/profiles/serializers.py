from rest_framework import serializers
from authentication.models import User

PUBLIC_PROFILE_FIELDS = ('id', 'full_name', 'profile_pic', 'native_language', 'learning_language')


class PublicProfileSerializer(serializers.ModelSerializer):
    """What one learner may see of another."""

    fullName = serializers.CharField(source='full_name', read_only=True)
    profilePic = serializers.CharField(source='profile_pic', read_only=True)
    nativeLanguage = serializers.CharField(source='native_language', read_only=True)
    learningLanguage = serializers.CharField(source='learning_language', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'fullName', 'profilePic', 'nativeLanguage', 'learningLanguage']


class RecommendedUserSerializer(PublicProfileSerializer):
    isOnboarded = serializers.BooleanField(source='is_onboarded', read_only=True)

    class Meta:
        model = User
        fields = PublicProfileSerializer.Meta.fields + ['bio', 'location', 'isOnboarded']
