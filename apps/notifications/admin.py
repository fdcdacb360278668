from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ['title', 'user', 'type', 'is_read', 'created_at']
    list_filter = ['type', 'is_read', 'created_at']
    search_fields = ['title', 'message', 'user__mobile_number', 'user__email']
    readonly_fields = ['created_at', 'updated_at', 'read_at']
    raw_id_fields = ['user']
