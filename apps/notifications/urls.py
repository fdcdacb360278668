from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'notifications'

router = SimpleRouter()
router.register(r'', views.NotificationViewSet, basename='notification')

urlpatterns = [
    # GET    /api/notifications/                - List notifications
    # GET    /api/notifications/unread-count/   - Unread count
    # POST   /api/notifications/read-all/       - Mark all read
    # POST   /api/notifications/{id}/read/      - Mark one read
    # DELETE /api/notifications/{id}/           - Delete
    path('', include(router.urls)),
]
