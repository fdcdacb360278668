from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'brands'

router = SimpleRouter()
router.register(r'brands', views.BrandViewSet, basename='brand')
router.register(r'brand-categories', views.BrandCategoryViewSet, basename='category')

urlpatterns = [
    # Brand routes
    # GET    /api/brands/                          - Search brands
    # POST   /api/brands/                          - Create brand (admin)
    # GET    /api/brands/active/                   - Active brands
    # GET    /api/brands/category/{category_id}/   - Active brands in category
    # GET    /api/brands/{id}/                     - Brand details
    # PATCH  /api/brands/{id}/                     - Update brand (admin)
    # PATCH  /api/brands/{id}/toggle-status/       - Toggle active flag (admin)
    # DELETE /api/brands/{id}/                     - Delete brand (admin)

    # Category routes
    # GET    /api/brand-categories/                - List categories
    # POST   /api/brand-categories/                - Create category (admin)
    # GET    /api/brand-categories/{id}/           - Category details
    # PATCH  /api/brand-categories/{id}/           - Update category (admin)
    # DELETE /api/brand-categories/{id}/           - Delete category (admin)

    path('', include(router.urls)),
]
