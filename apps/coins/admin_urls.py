from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'admin_coins'

router = SimpleRouter()
router.register(r'transactions', views.AdminTransactionViewSet, basename='transaction')

urlpatterns = [
    # GET  /api/admin/coins/transactions/                         - All transactions
    # GET  /api/admin/coins/transactions/pending/                 - Review queue
    # PUT  /api/admin/coins/transactions/{id}/approve/            - Approve earn
    # PUT  /api/admin/coins/transactions/{id}/reject/             - Reject earn
    # PUT  /api/admin/coins/transactions/{id}/approve-redeem/     - Approve redeem
    # PUT  /api/admin/coins/transactions/{id}/reject-redeem/      - Reject redeem
    # PUT  /api/admin/coins/transactions/{id}/process-payment/    - Pay out redeem
    path('welcome-bonus/', views.admin_welcome_bonus, name='welcome-bonus'),
    path('balance/<uuid:user_id>/', views.user_balance, name='user-balance'),
    path('summary/<uuid:user_id>/', views.user_summary, name='user-summary'),
    path('adjustments/', views.adjustments, name='adjustments'),
    path('stats/transactions/', views.transaction_stats, name='transaction-stats'),
    path('stats/payments/', views.payment_stats, name='payment-stats'),
    path('payments/', views.paid_transactions, name='payments'),
    path('payments/<uuid:transaction_id>/summary/', views.payment_summary, name='payment-summary'),
    path('', include(router.urls)),
]
