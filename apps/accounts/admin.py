from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html

from .models import User, UserProfile, PaymentDetails, AuthProvider, OTP, UserStatus


STATUS_COLORS = {
    UserStatus.ACTIVE: '#2E7D32',
    UserStatus.PENDING: '#F9A825',
    UserStatus.SUSPENDED: '#C62828',
    UserStatus.DELETED: '#757575',
}


class UserProfileInline(admin.StackedInline):
    model = UserProfile
    can_delete = False
    extra = 0


class PaymentDetailsInline(admin.StackedInline):
    model = PaymentDetails
    can_delete = False
    extra = 0


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for app users.

    Provides:
    - Listing with status badge and verification flags
    - Filtering by status and verification
    - Search by mobile number and email
    - Bulk status actions
    """

    inlines = [UserProfileInline, PaymentDetailsInline]

    list_display = [
        'mobile_number',
        'email',
        'status_badge',
        'is_mobile_verified',
        'is_email_verified',
        'has_welcome_bonus_processed',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'status',
        'is_mobile_verified',
        'is_email_verified',
        'has_welcome_bonus_processed',
        'is_staff',
        'created_at',
    ]

    search_fields = ['mobile_number', 'email']
    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('mobile_number', 'email', 'password', 'status', 'roles')
        }),
        ('Verification', {
            'fields': (
                'is_mobile_verified',
                'is_email_verified',
                'email_verification_token',
                'email_verification_token_expires_at',
            ),
        }),
        ('Coins', {
            'fields': ('has_welcome_bonus_processed',),
        }),
        ('Permissions', {
            'fields': ('is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('mobile_number', 'email', 'password1', 'password2'),
        }),
    )

    readonly_fields = ['created_at', 'updated_at', 'last_login']
    filter_horizontal = ['groups', 'user_permissions']

    def status_badge(self, obj):
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            STATUS_COLORS.get(obj.status, '#757575'),
            obj.get_status_display(),
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    actions = ['activate_users', 'suspend_users']

    @admin.action(description='Activate selected users')
    def activate_users(self, request, queryset):
        count = queryset.update(status=UserStatus.ACTIVE)
        self.message_user(request, f'Activated {count} user(s).')

    @admin.action(description='Suspend selected users')
    def suspend_users(self, request, queryset):
        """Suspend selected users (excludes superusers)."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(status=UserStatus.SUSPENDED)
        skipped = queryset.count() - count
        msg = f'Suspended {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s).'
        self.message_user(request, msg)


@admin.register(AuthProvider)
class AuthProviderAdmin(admin.ModelAdmin):
    list_display = ['user', 'provider', 'email', 'is_active', 'created_at']
    list_filter = ['provider', 'is_active']
    search_fields = ['user__mobile_number', 'email', 'provider_user_id']
    raw_id_fields = ['user']


@admin.register(OTP)
class OTPAdmin(admin.ModelAdmin):
    list_display = ['identifier', 'type', 'status', 'attempts', 'expires_at', 'created_at']
    list_filter = ['type', 'status']
    search_fields = ['identifier']
    readonly_fields = ['code_hash', 'verified_at', 'created_at', 'updated_at']
