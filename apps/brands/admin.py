from django.contrib import admin
from apps.brands.models import Brand, BrandCategory


class BrandInline(admin.TabularInline):
    """Inline admin for brands in a category."""
    model = Brand
    extra = 0
    fields = ['name', 'earning_percentage', 'redemption_percentage', 'is_active']
    show_change_link = True


@admin.register(BrandCategory)
class BrandCategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'icon', 'color', 'brand_count', 'created_at']
    search_fields = ['name', 'description']
    inlines = [BrandInline]

    def brand_count(self, obj):
        return obj.brands.count()
    brand_count.short_description = 'Brands'


@admin.register(Brand)
class BrandAdmin(admin.ModelAdmin):
    """Admin interface for partner brands."""

    list_display = [
        'name',
        'category',
        'earning_percentage',
        'redemption_percentage',
        'min_redemption_amount',
        'brandwise_max_cap',
        'is_active',
        'created_at',
    ]
    list_filter = ['is_active', 'category', 'created_at']
    search_fields = ['name', 'description']
    readonly_fields = ['max_redemption_amount', 'created_at', 'updated_at']
    list_select_related = ['category']
    ordering = ['name']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'description', 'logo_url', 'category', 'is_active')
        }),
        ('Coin Rules', {
            'fields': (
                'earning_percentage',
                'redemption_percentage',
                'min_redemption_amount',
                'max_redemption_amount',
                'brandwise_max_cap',
            )
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    actions = ['activate_brands', 'deactivate_brands']

    def save_model(self, request, obj, form, change):
        obj.max_redemption_amount = obj.brandwise_max_cap
        super().save_model(request, obj, form, change)

    @admin.action(description='Activate selected brands')
    def activate_brands(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'Activated {count} brand(s).')

    @admin.action(description='Deactivate selected brands')
    def deactivate_brands(self, request, queryset):
        count = queryset.update(is_active=False)
        self.message_user(request, f'Deactivated {count} brand(s).')
