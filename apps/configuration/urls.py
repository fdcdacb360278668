from django.urls import path
from . import views

app_name = 'config'

urlpatterns = [
    path('', views.config_list, name='list'),
    path('category/<str:category>/', views.config_by_category, name='by-category'),
    path('transaction/', views.transaction_configs, name='transaction'),
    path('brand/', views.brand_configs, name='brand'),
    path('user/', views.user_configs, name='user'),
    path('security/', views.security_configs, name='security'),
    path('initialize-defaults/', views.config_initialize_defaults, name='initialize-defaults'),
    path('cache/clear/', views.config_clear_cache, name='clear-cache'),
    path('<str:key>/', views.config_update, name='update'),
]
