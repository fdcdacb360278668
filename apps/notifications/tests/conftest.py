import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User, UserProfile, UserStatus
from apps.notifications.models import Notification, NotificationType
from apps.notifications.services import realtime


class RecordingChannelLayer:
    """Channel layer stand-in that keeps every group_send."""

    def __init__(self):
        self.sent = []

    async def group_send(self, group, message):
        self.sent.append((group, message))

    def events(self, group=None):
        return [
            message['event'] for sent_group, message in self.sent
            if group is None or sent_group == group
        ]


@pytest.fixture
def channel_layer(monkeypatch):
    """Capture realtime publishes instead of sending them."""
    layer = RecordingChannelLayer()
    monkeypatch.setattr(realtime, 'get_channel_layer', lambda: layer)
    return layer


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


def make_user(mobile_number, **extra):
    user = User.objects.create_user(
        mobile_number=mobile_number,
        password='TestPass123',
        status=UserStatus.ACTIVE,
        is_mobile_verified=True,
        **extra,
    )
    UserProfile.objects.create(user=user, first_name='Notified', last_name='User')
    return user


@pytest.fixture
def user(db):
    return make_user('9876543210')


@pytest.fixture
def other_user(db):
    return make_user('9000000002')


def make_notification(user, title='Hello', type=NotificationType.SYSTEM, **extra):
    return Notification.objects.create(
        user=user,
        type=type,
        title=title,
        message=f'{title} message',
        **extra,
    )


@pytest.fixture
def notifications(user):
    """Two unread and one read notification for user."""
    return [
        make_notification(user, 'First'),
        make_notification(user, 'Second', type=NotificationType.BALANCE_UPDATE),
        make_notification(user, 'Third', is_read=True),
    ]


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as user."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
