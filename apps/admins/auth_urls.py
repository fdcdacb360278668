from django.urls import path
from . import views

app_name = 'admin_auth'

urlpatterns = [
    path('login/', views.admin_login, name='login'),
    path('verify/', views.admin_verify, name='verify'),
]
