from django.db import models
import uuid


class ConfigType(models.TextChoices):
    STRING = 'string', 'String'
    NUMBER = 'number', 'Number'
    BOOLEAN = 'boolean', 'Boolean'
    JSON = 'json', 'JSON'


class ConfigCategory(models.TextChoices):
    TRANSACTION = 'transaction', 'Transaction'
    BRAND = 'brand', 'Brand'
    USER = 'user', 'User'
    SECURITY = 'security', 'Security'


class GlobalConfig(models.Model):
    """Runtime business setting stored as text with a declared type."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    key = models.CharField(max_length=100, unique=True)
    value = models.TextField()
    description = models.CharField(max_length=200, blank=True, default='')
    type = models.CharField(max_length=20, choices=ConfigType.choices, default=ConfigType.STRING)
    is_editable = models.BooleanField(default=True)
    category = models.CharField(max_length=20, choices=ConfigCategory.choices, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'global_configs'
        ordering = ['category', 'key']
        indexes = [
            models.Index(fields=['category']),
        ]

    def __str__(self):
        return f"{self.key}={self.value}"
