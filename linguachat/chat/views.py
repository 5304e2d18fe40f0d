# chat/views.py
import logging

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from chat import bridge as chat_bridge
from chat.bridge import BridgeError
from common.exceptions import Internal

logger = logging.getLogger(__name__)


class StreamTokenView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        try:
            token = chat_bridge.get_chat_bridge().mint_token(request.user.id)
        except BridgeError as e:
            logger.error(f"Error in StreamTokenView: {str(e)}")
            raise Internal() from e
        return Response({"token": token})
