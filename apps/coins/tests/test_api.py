"""
API tests for coin endpoints (user app and admin portal).
"""

import pytest
from uuid import uuid4

from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from apps.coins.models import CoinBalance, CoinTransaction, TransactionType, TransactionStatus


def transaction_url(name, coin_transaction):
    return reverse(f'admin_coins:transaction-{name}', kwargs={'pk': coin_transaction.id})


@pytest.mark.django_db
class TestEarnAPI:

    def test_submit_earn(self, authenticated_client, brand):
        url = reverse('coins:earn')
        data = {
            'brand_id': str(brand.id),
            'bill_amount': '850.00',
            'bill_date': timezone.localdate().isoformat(),
            'receipt_url': 'https://cdn.clubcorra.com/receipts/1.jpg',
        }

        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['type'] == 'EARN'
        assert response.data['status'] == 'PENDING'
        assert response.data['amount'] == 85
        assert response.data['brand']['name'] == 'Cafe Corra'

    def test_business_rule_error(self, authenticated_client, brand):
        url = reverse('coins:earn')
        data = {
            'brand_id': str(brand.id),
            'bill_amount': '20.00',
            'bill_date': timezone.localdate().isoformat(),
        }

        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'Bill amount must be at least' in response.data['detail']

    def test_invalid_payload(self, authenticated_client):
        response = authenticated_client.post(reverse('coins:earn'), {'bill_amount': '-5'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'brand_id' in response.data
        assert 'bill_date' in response.data

    def test_unknown_brand(self, authenticated_client):
        data = {
            'brand_id': str(uuid4()),
            'bill_amount': '500.00',
            'bill_date': timezone.localdate().isoformat(),
        }
        response = authenticated_client.post(reverse('coins:earn'), data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_requires_authentication(self, api_client, brand):
        response = api_client.post(reverse('coins:earn'), {}, format='json')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_admin_token_is_not_a_user(self, admin_api_client):
        response = admin_api_client.post(reverse('coins:earn'), {}, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestRedeemAPI:

    def test_submit_redeem(self, authenticated_client, funded_user, brand):
        data = {'brand_id': str(brand.id), 'bill_amount': '1000.00', 'coins_to_redeem': 250}

        response = authenticated_client.post(reverse('coins:redeem'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['amount'] == -250
        assert response.data['coins_redeemed'] == 250
        assert CoinBalance.objects.get(user=funded_user).balance == 500

    def test_insufficient_balance(self, authenticated_client, brand):
        data = {'brand_id': str(brand.id), 'bill_amount': '1000.00', 'coins_to_redeem': 100}

        response = authenticated_client.post(reverse('coins:redeem'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['detail'] == 'Insufficient coin balance.'

    def test_zero_coins_rejected_by_serializer(self, authenticated_client, brand):
        data = {'brand_id': str(brand.id), 'bill_amount': '1000.00', 'coins_to_redeem': 0}

        response = authenticated_client.post(reverse('coins:redeem'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'coins_to_redeem' in response.data


@pytest.mark.django_db
class TestUserCoinViews:

    def test_balance_starts_at_zero(self, authenticated_client):
        response = authenticated_client.get(reverse('coins:balance'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['balance'] == 0
        assert response.data['total_earned'] == 0

    def test_summary(self, authenticated_client, funded_user, pending_earn):
        response = authenticated_client.get(reverse('coins:summary'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['balance'] == 500
        assert response.data['pending_earn_count'] == 1

    def test_history_is_paginated_and_private(self, authenticated_client, user, other_user, brand):
        for _ in range(3):
            CoinTransaction.objects.create(
                user=user, brand=brand, type=TransactionType.EARN,
                status=TransactionStatus.APPROVED, amount=10, coins_earned=10,
            )
        CoinTransaction.objects.create(
            user=other_user, brand=brand, type=TransactionType.EARN,
            status=TransactionStatus.APPROVED, amount=99, coins_earned=99,
        )

        response = authenticated_client.get(reverse('coins:my-transactions'), {'page_size': 2})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 3
        assert len(response.data['results']) == 2
        assert response.data['next'] is not None

    def test_transaction_detail(self, authenticated_client, pending_earn):
        url = reverse('coins:transaction-detail', kwargs={'transaction_id': pending_earn.id})

        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(pending_earn.id)

    def test_transaction_detail_of_other_user(self, api_client, other_user, pending_earn):
        from rest_framework_simplejwt.tokens import RefreshToken

        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {RefreshToken.for_user(other_user).access_token}')
        url = reverse('coins:transaction-detail', kwargs={'transaction_id': pending_earn.id})

        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_welcome_bonus_claim(self, authenticated_client):
        url = reverse('coins:welcome-bonus')

        assert authenticated_client.get(url).data == {'eligible': True, 'amount': 100}

        response = authenticated_client.post(url)
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['coins_awarded'] == 100
        assert response.data['new_balance'] == 100

        again = authenticated_client.post(url)
        assert again.status_code == status.HTTP_409_CONFLICT
        assert authenticated_client.get(url).data['eligible'] is False


@pytest.mark.django_db
class TestAdminReviewAPI:

    def test_pending_queue(self, admin_api_client, pending_earn, pending_redeem):
        url = reverse('admin_coins:transaction-pending')

        response = admin_api_client.get(url, {'type': 'EARN'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        result = response.data['results'][0]
        assert result['id'] == str(pending_earn.id)
        assert result['user']['mobile_number'] == '9876543210'
        assert result['user']['full_name'] == 'Coin Tester'

    def test_list_with_filters(self, admin_api_client, pending_earn, pending_redeem):
        url = reverse('admin_coins:transaction-list')

        response = admin_api_client.get(url, {'type': 'REDEEM', 'status': 'PENDING'})

        assert response.status_code == status.HTTP_200_OK
        assert [t['id'] for t in response.data['results']] == [str(pending_redeem.id)]

    def test_list_rejects_unknown_status(self, admin_api_client):
        response = admin_api_client.get(reverse('admin_coins:transaction-list'), {'status': 'LOST'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_approve_earn(self, admin_api_client, user, pending_earn):
        response = admin_api_client.put(
            transaction_url('approve', pending_earn),
            {'admin_notes': 'Looks good'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'APPROVED'
        assert CoinBalance.objects.get(user=user).balance == 100

    def test_approve_twice(self, admin_api_client, pending_earn):
        admin_api_client.put(transaction_url('approve', pending_earn), {}, format='json')

        response = admin_api_client.put(transaction_url('approve', pending_earn), {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['detail'] == 'Transaction is not pending approval'

    def test_reject_without_notes(self, admin_api_client, pending_earn):
        response = admin_api_client.put(transaction_url('reject', pending_earn), {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        pending_earn.refresh_from_db()
        assert pending_earn.status == TransactionStatus.PENDING

    def test_reject_with_notes(self, admin_api_client, pending_earn):
        response = admin_api_client.put(
            transaction_url('reject', pending_earn),
            {'admin_notes': 'Receipt unreadable'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'REJECTED'
        assert response.data['admin_notes'] == 'Receipt unreadable'

    def test_approve_redeem_blocked_by_pending_earn(self, admin_api_client, pending_earn, pending_redeem):
        response = admin_api_client.put(transaction_url('approve-redeem', pending_redeem), {}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_approve_and_reject_redeem(self, admin_api_client, funded_user, pending_redeem, brand):
        response = admin_api_client.put(transaction_url('approve-redeem', pending_redeem), {}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'PROCESSED'
        assert CoinBalance.objects.get(user=funded_user).balance == 300

        other = CoinTransaction.objects.create(
            user=funded_user, brand=brand, type=TransactionType.REDEEM,
            status=TransactionStatus.PENDING, amount=-50, coins_redeemed=50,
        )
        response = admin_api_client.put(
            transaction_url('reject-redeem', other),
            {'admin_notes': 'Duplicate request'},
            format='json',
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'REJECTED'

    def test_unknown_transaction(self, admin_api_client):
        url = reverse('admin_coins:transaction-approve', kwargs={'pk': uuid4()})

        response = admin_api_client.put(url, {}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_user_token_is_forbidden(self, authenticated_client, pending_earn):
        response = authenticated_client.put(transaction_url('approve', pending_earn), {}, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_anonymous_is_unauthorized(self, api_client, pending_earn):
        response = api_client.put(transaction_url('approve', pending_earn), {}, format='json')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestAdminPaymentAPI:

    def payment(self, reference='UPI-REF-1', amount='200.00'):
        return {
            'payment_transaction_id': reference,
            'payment_method': 'UPI',
            'payment_amount': amount,
        }

    def test_process_payment(self, admin_api_client, processed_redeem):
        response = admin_api_client.put(
            transaction_url('process-payment', processed_redeem),
            self.payment(),
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'PAID'
        assert response.data['transaction_id'] == 'UPI-REF-1'

    def test_wrong_amount(self, admin_api_client, processed_redeem):
        response = admin_api_client.put(
            transaction_url('process-payment', processed_redeem),
            self.payment(amount='210.00'),
            format='json',
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_duplicate_reference(self, admin_api_client, processed_redeem, other_user, brand):
        CoinTransaction.objects.create(
            user=other_user, brand=brand, type=TransactionType.REDEEM,
            status=TransactionStatus.PAID, amount=-20, coins_redeemed=20,
            transaction_id='UPI-REF-1',
        )

        response = admin_api_client.put(
            transaction_url('process-payment', processed_redeem),
            self.payment(),
            format='json',
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_paid_list_summary_and_stats(self, admin_api_client, processed_redeem):
        admin_api_client.put(
            transaction_url('process-payment', processed_redeem),
            self.payment(),
            format='json',
        )

        listing = admin_api_client.get(reverse('admin_coins:payments'))
        assert listing.status_code == status.HTTP_200_OK
        assert listing.data['count'] == 1

        summary = admin_api_client.get(
            reverse('admin_coins:payment-summary', kwargs={'transaction_id': processed_redeem.id})
        )
        assert summary.status_code == status.HTTP_200_OK
        assert summary.data['coin_amount'] == 200
        assert summary.data['upi_id'] == '9876543210@upi'

        stats = admin_api_client.get(reverse('admin_coins:payment-stats'))
        assert stats.status_code == status.HTTP_200_OK
        assert stats.data['total_paid'] == 1
        assert stats.data['payment_methods'] == {'UPI': 1}

    def test_stats_rejects_reversed_range(self, admin_api_client):
        response = admin_api_client.get(
            reverse('admin_coins:payment-stats'),
            {'start_date': '2024-02-01', 'end_date': '2024-01-01'},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestAdminBalanceAPI:

    def test_adjustment(self, admin_api_client, user):
        data = {'user_id': str(user.id), 'amount': 75, 'description': 'Store credit', 'reason': 'Ticket 42'}

        response = admin_api_client.post(reverse('admin_coins:adjustments'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['type'] == 'ADJUSTMENT'
        assert response.data['amount'] == 75

        balance = admin_api_client.get(reverse('admin_coins:user-balance', kwargs={'user_id': user.id}))
        assert balance.data['balance'] == 75

    def test_adjustment_cannot_overdraw(self, admin_api_client, user):
        data = {'user_id': str(user.id), 'amount': -1, 'description': 'Oops'}

        response = admin_api_client.post(reverse('admin_coins:adjustments'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_zero_adjustment(self, admin_api_client, user):
        data = {'user_id': str(user.id), 'amount': 0, 'description': 'Nothing'}

        response = admin_api_client.post(reverse('admin_coins:adjustments'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'amount' in response.data

    def test_unknown_user_balance(self, admin_api_client):
        response = admin_api_client.get(reverse('admin_coins:user-balance', kwargs={'user_id': uuid4()}))
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_user_summary(self, admin_api_client, funded_user):
        response = admin_api_client.get(reverse('admin_coins:user-summary', kwargs={'user_id': funded_user.id}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['balance'] == 500

    def test_grant_welcome_bonus(self, admin_api_client, user):
        url = reverse('admin_coins:welcome-bonus')

        response = admin_api_client.post(url, {'user_id': str(user.id)}, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['success'] is True

        response = admin_api_client.post(url, {'user_id': str(user.id)}, format='json')
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_transaction_stats(self, admin_api_client, pending_earn, pending_redeem):
        response = admin_api_client.get(reverse('admin_coins:transaction-stats'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['pending_earn_requests'] == 1
        assert response.data['pending_redeem_requests'] == 1
        assert response.data['total_coins_in_circulation'] == 500

    def test_stats_require_admin(self, authenticated_client):
        response = authenticated_client.get(reverse('admin_coins:transaction-stats'))
        assert response.status_code == status.HTTP_403_FORBIDDEN
