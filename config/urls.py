"""
URL configuration for the Club Corra API.

REST endpoints live under /api/, the notification websocket is routed
in config/asgi.py.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from config.views import health_check

urlpatterns = [
    # Health check
    path('api/health/', health_check, name='health-check'),

    # Django admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Authentication
    path('api/auth/admin/', include('apps.admins.auth_urls')),
    path('api/auth/', include('apps.accounts.urls')),

    # User API
    path('api/users/', include('apps.accounts.user_urls')),
    path('api/coins/', include('apps.coins.urls')),
    path('api/notifications/', include('apps.notifications.urls')),

    # Admin portal API
    path('api/admin/coins/', include('apps.coins.admin_urls')),
    path('api/admin/', include('apps.admins.urls')),
    path('api/config/', include('apps.configuration.urls')),

    # Brands and categories (/api/brands/, /api/brand-categories/)
    path('api/', include('apps.brands.urls')),
]


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
