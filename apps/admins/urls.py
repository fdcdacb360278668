from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'admins'

router = SimpleRouter()
router.register(r'admins', views.AdminViewSet, basename='admin')
router.register(r'users', views.UserAdminViewSet, basename='user')

urlpatterns = [
    # Admin accounts
    # GET    /api/admin/admins/              - List admins
    # POST   /api/admin/admins/              - Create admin (super admin)
    # GET    /api/admin/admins/stats/        - Admin counts
    # GET    /api/admin/admins/me/           - Own account
    # PUT    /api/admin/admins/me/           - Update own account
    # GET    /api/admin/admins/{id}/         - Admin details
    # PUT    /api/admin/admins/{id}/         - Update admin (super admin)
    # DELETE /api/admin/admins/{id}/         - Delete admin (super admin)

    # App users
    # GET    /api/admin/users/               - List users
    # GET    /api/admin/users/stats/         - User statistics
    # GET    /api/admin/users/{id}/          - User details
    # PUT    /api/admin/users/{id}/status/   - Change account status

    path('', include(router.urls)),
]
