"""
ASGI config for the petpaw service.

HTTP goes to Django. WebSocket connections for live ride and order tracking
are routed to the channels consumers in ``apps.tracking``.
"""

import os

from channels.auth import AuthMiddlewareStack
from channels.routing import ProtocolTypeRouter, URLRouter
from channels.security.websocket import AllowedHostsOriginValidator
from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.development")

django_asgi_app = get_asgi_application()

from apps.tracking.routing import websocket_urlpatterns as tracking_websocket_urlpatterns

ws_urlpatterns = [
    *tracking_websocket_urlpatterns,
]

application = ProtocolTypeRouter(
    {
        "http": django_asgi_app,
        "websocket": AllowedHostsOriginValidator(
            AuthMiddlewareStack(URLRouter(ws_urlpatterns))
        ),
    }
)
