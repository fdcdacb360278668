from django.urls import path
from . import views

app_name = 'coins'

urlpatterns = [
    path('transactions/earn/', views.earn_request, name='earn'),
    path('transactions/redeem/', views.redeem_request, name='redeem'),
    path('transactions/my/', views.my_transactions, name='my-transactions'),
    path('transactions/<uuid:transaction_id>/', views.transaction_detail, name='transaction-detail'),
    path('balance/', views.my_balance, name='balance'),
    path('summary/', views.my_summary, name='summary'),
    path('welcome-bonus/', views.my_welcome_bonus, name='welcome-bonus'),
]
