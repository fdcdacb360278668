from rest_framework import serializers

from .models import Notification, NotificationType


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = [
            'id',
            'type',
            'title',
            'message',
            'data',
            'is_read',
            'read_at',
            'created_at',
        ]
        read_only_fields = fields


class NotificationFilterSerializer(serializers.Serializer):
    """Query parameters for the notification list."""

    unread_only = serializers.BooleanField(required=False, default=False)
    type = serializers.ChoiceField(choices=NotificationType.choices, required=False)


class UnreadCountSerializer(serializers.Serializer):
    unread_count = serializers.IntegerField()
