# linguachat/linguachat/asgi.py
import os
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'linguachat.settings')
import django
django.setup()
from django.core.asgi import get_asgi_application
from channels.routing import ProtocolTypeRouter, URLRouter
from channels.auth import AuthMiddlewareStack
from contacts.routing import websocket_urlpatterns as contacts_websocket_urlpatterns


application = ProtocolTypeRouter({
    "http": get_asgi_application(),
    "websocket": AuthMiddlewareStack(
        URLRouter(contacts_websocket_urlpatterns)
    ),
})
