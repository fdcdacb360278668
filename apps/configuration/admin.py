from django.contrib import admin

from .models import GlobalConfig
from .services import clear_cache


@admin.register(GlobalConfig)
class GlobalConfigAdmin(admin.ModelAdmin):
    list_display = ['key', 'value', 'type', 'category', 'is_editable', 'updated_at']
    list_filter = ['category', 'type', 'is_editable']
    search_fields = ['key', 'description']
    ordering = ['category', 'key']
    readonly_fields = ['created_at', 'updated_at']

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        clear_cache()
