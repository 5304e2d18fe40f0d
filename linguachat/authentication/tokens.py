from django.conf import settings
from rest_framework_simplejwt.tokens import AccessToken


def issue_access_token(user):
    return str(AccessToken.for_user(user))


def set_token_cookie(response, token):
    lifetime = settings.SIMPLE_JWT['ACCESS_TOKEN_LIFETIME']
    response.set_cookie(
        settings.JWT_COOKIE_NAME,
        token,
        max_age=int(lifetime.total_seconds()),
        httponly=True,
        samesite='Strict',
        secure=settings.JWT_COOKIE_SECURE,
    )
    return response


def clear_token_cookie(response):
    response.delete_cookie(settings.JWT_COOKIE_NAME, samesite='Strict')
    return response
