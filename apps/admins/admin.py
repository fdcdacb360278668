from django import forms
from django.contrib import admin

from .models import Admin


class AdminAccountForm(forms.ModelForm):
    new_password = forms.CharField(
        required=False,
        widget=forms.PasswordInput,
        help_text='Leave blank to keep the current password.',
    )

    class Meta:
        model = Admin
        exclude = ['password']


@admin.register(Admin)
class AdminAccountAdmin(admin.ModelAdmin):
    """Django admin for portal admin accounts."""

    form = AdminAccountForm
    list_display = ['email', 'first_name', 'last_name', 'role', 'status', 'last_login_at', 'created_at']
    list_filter = ['role', 'status']
    search_fields = ['email', 'first_name', 'last_name']
    readonly_fields = ['last_login_at', 'created_at', 'updated_at']
    ordering = ['-created_at']

    def save_model(self, request, obj, form, change):
        new_password = form.cleaned_data.get('new_password')
        if new_password:
            obj.set_password(new_password)
        super().save_model(request, obj, form, change)
