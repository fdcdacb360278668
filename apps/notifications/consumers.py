import logging
from urllib.parse import parse_qs

from asgiref.sync import async_to_sync
from channels.generic.websocket import JsonWebsocketConsumer
from django.utils import timezone
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken, TokenError

from apps.admins.authentication import PlatformJWTAuthentication
from apps.admins.models import Admin

from .services.realtime import ADMINS_GROUP, user_group

logger = logging.getLogger(__name__)

UNAUTHORIZED_CLOSE_CODE = 4401


class NotificationConsumer(JsonWebsocketConsumer):
    """
    Per-principal notification socket.

    Connect with ``ws/notifications/?token=<access token>``. Users join
    their own group, admins join theirs and the shared admins group.
    Unauthenticated sockets are closed with code 4401.
    """

    def connect(self):
        self.joined_groups = []
        self.accept()

        principal = self.authenticate()
        if principal is None:
            self.close(code=UNAUTHORIZED_CLOSE_CODE)
            return

        self.principal = principal
        self.join(user_group(principal.id))
        if isinstance(principal, Admin):
            self.join(ADMINS_GROUP)

        logger.info("Websocket connected for %s %s", type(principal).__name__, principal.id)

    def authenticate(self):
        """Resolve the ``token`` query parameter to a User or Admin."""
        query = parse_qs(self.scope.get('query_string', b'').decode())
        raw_token = (query.get('token') or [None])[0]
        if not raw_token:
            return None

        auth = PlatformJWTAuthentication()
        try:
            validated_token = auth.get_validated_token(raw_token)
            return auth.get_user(validated_token)
        except (InvalidToken, AuthenticationFailed, TokenError) as e:
            logger.warning("Websocket authentication failed: %s", e)
            return None

    def join(self, group):
        async_to_sync(self.channel_layer.group_add)(group, self.channel_name)
        self.joined_groups.append(group)

    def disconnect(self, code):
        for group in getattr(self, 'joined_groups', []):
            async_to_sync(self.channel_layer.group_discard)(group, self.channel_name)
        logger.debug("Websocket disconnected (%s)", code)

    def receive_json(self, content, **kwargs):
        if content.get('event') == 'ping':
            self.send_json({'event': 'pong', 'data': {'timestamp': timezone.now().isoformat()}})

    def relay_event(self, message):
        """Forward a published event to the socket."""
        self.send_json({
            'event': message['event'],
            'data': message['data'],
            'timestamp': message['timestamp'],
        })
