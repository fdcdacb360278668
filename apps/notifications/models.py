from django.conf import settings
from django.db import models
import uuid


class NotificationType(models.TextChoices):
    TRANSACTION_STATUS = 'TRANSACTION_STATUS', 'Transaction status'
    BALANCE_UPDATE = 'BALANCE_UPDATE', 'Balance update'
    SYSTEM = 'SYSTEM', 'System'
    PAYMENT_PROCESSED = 'PAYMENT_PROCESSED', 'Payment processed'


class Notification(models.Model):
    """In-app notification, also pushed over the user's websocket."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications',
    )
    type = models.CharField(max_length=30, choices=NotificationType.choices)
    title = models.CharField(max_length=200)
    message = models.TextField()
    data = models.JSONField(default=dict, blank=True)
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'notifications'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'is_read']),
            models.Index(fields=['user', '-created_at']),
        ]

    def __str__(self):
        return f"{self.user} - {self.title}"
