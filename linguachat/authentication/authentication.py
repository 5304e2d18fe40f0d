# authentication/authentication.py
import logging

from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken

logger = logging.getLogger(__name__)


class CookieJWTAuthentication(JWTAuthentication):
    """
    Resolves a signed access token to a User.

    The bearer header wins when present; browsers send the token in the
    http-only "jwt" cookie set at signup/login.
    """

    def authenticate(self, request):
        header = self.get_header(request)
        if header is not None:
            raw_token = self.get_raw_token(header)
        else:
            raw_token = request.COOKIES.get(settings.JWT_COOKIE_NAME)

        if not raw_token:
            return None

        if isinstance(raw_token, str):
            raw_token = raw_token.encode()

        validated_token = self.get_validated_token(raw_token)
        try:
            user = self.get_user(validated_token)
        except AuthenticationFailed as e:
            logger.warning(f"Token rejected: {e}")
            raise InvalidToken("Unauthorized - User not found")
        return user, validated_token
