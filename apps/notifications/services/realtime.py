"""
Realtime relay over the Channels layer.

Every authenticated socket joins ``user_<id>``; admin sockets also join
``admins``. Events reach the socket as
``{"event": ..., "data": ..., "timestamp": ...}``.

Publishing never raises: a missing or failing channel layer is logged
and the caller carries on.
"""

import logging
from uuid import UUID
from typing import Any, Dict, Union

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.utils import timezone

logger = logging.getLogger(__name__)

ADMINS_GROUP = 'admins'
RELAY_MESSAGE_TYPE = 'relay.event'

# Event names
BALANCE_UPDATED = 'balance_updated'
TRANSACTION_STATUS_CHANGED = 'transaction_status_changed'
NOTIFICATION_RECEIVED = 'notification_received'
NEW_TRANSACTION = 'new_transaction'
ADMIN_DASHBOARD_UPDATE = 'admin_dashboard_update'


def user_group(user_id: Union[UUID, str]) -> str:
    return f'user_{user_id}'


def publish(group: str, event: str, data: Dict[str, Any]) -> bool:
    """
    Send an event to every socket in a group.

    Returns:
        True if the message was handed to the channel layer
    """
    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.debug("No channel layer configured, dropping %s for %s", event, group)
        return False

    message = {
        'type': RELAY_MESSAGE_TYPE,
        'event': event,
        'data': data,
        'timestamp': timezone.now().isoformat(),
    }
    try:
        async_to_sync(channel_layer.group_send)(group, message)
    except Exception:
        logger.exception("Failed to publish %s to %s", event, group)
        return False

    logger.debug("Published %s to %s", event, group)
    return True


def publish_to_user(user_id: Union[UUID, str], event: str, data: Dict[str, Any]) -> bool:
    return publish(user_group(user_id), event, data)


def publish_to_admins(event: str, data: Dict[str, Any]) -> bool:
    return publish(ADMINS_GROUP, event, data)
