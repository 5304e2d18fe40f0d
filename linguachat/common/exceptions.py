# common/exceptions.py
import logging

from rest_framework import status
from rest_framework.exceptions import NotAuthenticated, AuthenticationFailed, PermissionDenied, APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError

logger = logging.getLogger(__name__)


class LinguaChatError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "INTERNAL"
    default_message = "Internal Server Error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self):
        return {"error": self.message, "code": self.code}


class InvalidInput(LinguaChatError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "INVALID_INPUT"
    default_message = "Invalid input"

    def __init__(self, message=None, missing_fields=None):
        super().__init__(message)
        self.missing_fields = list(missing_fields or [])

    def to_payload(self):
        payload = super().to_payload()
        if self.missing_fields:
            payload["missingFields"] = self.missing_fields
        return payload


class InvalidOperation(LinguaChatError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "INVALID_OPERATION"
    default_message = "Invalid operation"


class NotFound(LinguaChatError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    default_message = "Not found"


class Forbidden(LinguaChatError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"
    default_message = "Permission denied"


class Conflict(LinguaChatError):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"
    default_message = "Conflict"


class Unauthorized(LinguaChatError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"
    default_message = "Unauthorized"


class Internal(LinguaChatError):
    # The message stays generic so storage/provider details never reach clients.
    pass


def custom_exception_handler(exc, context):
    if isinstance(exc, LinguaChatError):
        if isinstance(exc, Internal):
            logger.error(f"Internal error in {_view_name(context)}: {exc.__cause__ or exc}")
        return Response(exc.to_payload(), status=exc.status_code)

    if isinstance(exc, (NotAuthenticated, AuthenticationFailed, InvalidToken, TokenError)):
        message = "Unauthorized - No token provided" if isinstance(exc, NotAuthenticated) else "Unauthorized - Invalid token"
        return Response(Unauthorized(message).to_payload(), status=status.HTTP_401_UNAUTHORIZED)

    if isinstance(exc, PermissionDenied):
        return Response(Forbidden().to_payload(), status=status.HTTP_403_FORBIDDEN)

    response = exception_handler(exc, context)
    if response is not None:
        if isinstance(exc, APIException):
            response.data = {"error": _flatten_detail(exc.detail), "code": exc.default_code.upper()}
        return response

    logger.exception(f"Unhandled error in {_view_name(context)}: {exc}", exc_info=exc)
    return Response(Internal().to_payload(), status=status.HTTP_500_INTERNAL_SERVER_ERROR)


def _view_name(context):
    view = context.get("view") if context else None
    return view.__class__.__name__ if view is not None else "unknown view"


def _flatten_detail(detail):
    if isinstance(detail, list):
        return " ".join(str(item) for item in detail)
    if isinstance(detail, dict):
        return " ".join(f"{key}: {_flatten_detail(value)}" for key, value in detail.items())
    return str(detail)
