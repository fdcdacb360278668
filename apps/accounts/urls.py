from django.urls import path
from . import views

app_name = 'auth'

urlpatterns = [
    # Staged signup
    path('signup/initial/', views.signup_initial, name='signup-initial'),
    path('signup/verify-otp/', views.signup_verify_otp, name='signup-verify-otp'),
    path('signup/setup-password/', views.signup_setup_password, name='signup-setup-password'),
    path('signup/add-email/', views.signup_add_email, name='signup-add-email'),
    path('signup/verify-email/', views.signup_verify_email, name='signup-verify-email'),

    # OTP
    path('request-otp/', views.request_otp_view, name='request-otp'),
    path('verify-otp/', views.verify_otp_view, name='verify-otp'),

    # Login
    path('login/mobile/', views.login_mobile, name='login-mobile'),
    path('login/mobile-password/', views.login_mobile_password, name='login-mobile-password'),
    path('login/email/', views.login_email, name='login-email'),
    path('refresh-token/', views.refresh_token, name='refresh-token'),
    path('logout/', views.logout, name='logout'),

    # Password & email
    path('setup-password/', views.setup_password_view, name='setup-password'),
    path('verify-email/', views.verify_email, name='verify-email'),
    path('request-email-verification/', views.request_email_verification_view, name='request-email-verification'),
    path('request-password-reset/', views.request_password_reset_view, name='request-password-reset'),
    path('reset-password/', views.reset_password, name='reset-password'),
]
