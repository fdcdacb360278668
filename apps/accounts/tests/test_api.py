import pytest
from django.urls import reverse
from rest_framework import status

from apps.accounts.models import OTPType, User
from apps.accounts.services import generate_otp, issue_tokens


# =============================================================================
# Signup
# =============================================================================

@pytest.mark.django_db
class TestSignupFlow:
    """Tests for /api/auth/signup/*"""

    def test_initial_signup(self, api_client):
        url = reverse('auth:signup-initial')
        data = {'first_name': 'Asha', 'last_name': 'Rao', 'mobile_number': '9999999999'}

        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['requires_otp_verification'] is True
        assert User.objects.filter(mobile_number='9999999999').exists()

    def test_initial_signup_invalid_mobile(self, api_client):
        url = reverse('auth:signup-initial')
        data = {'first_name': 'Asha', 'last_name': 'Rao', 'mobile_number': 'abc'}

        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'mobile_number' in response.data

    def test_initial_signup_existing_user(self, api_client, user):
        url = reverse('auth:signup-initial')
        data = {'first_name': 'Test', 'last_name': 'User', 'mobile_number': user.mobile_number}

        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['redirect_to_login'] is True

    def test_verify_otp_then_password(self, api_client, pending_user):
        code = generate_otp(identifier=pending_user.mobile_number, otp_type=OTPType.SMS)

        response = api_client.post(reverse('auth:signup-verify-otp'), {
            'mobile_number': pending_user.mobile_number,
            'otp_code': code,
        })
        assert response.status_code == status.HTTP_200_OK
        assert response.data['requires_password_setup'] is True

        response = api_client.post(reverse('auth:signup-setup-password'), {
            'mobile_number': pending_user.mobile_number,
            'password': 'StrongPass1',
            'confirm_password': 'StrongPass1',
        })
        assert response.status_code == status.HTTP_200_OK
        assert response.data['requires_email_verification'] is False
        assert 'access_token' in response.data
        assert 'refresh_token' in response.data

    def test_verify_otp_wrong_code(self, api_client, pending_user):
        code = generate_otp(identifier=pending_user.mobile_number, otp_type=OTPType.SMS)
        wrong = '000000' if code != '000000' else '111111'

        response = api_client.post(reverse('auth:signup-verify-otp'), {
            'mobile_number': pending_user.mobile_number,
            'otp_code': wrong,
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert 'error' in response.data

    def test_setup_password_weak(self, api_client, pending_user):
        pending_user.is_mobile_verified = True
        pending_user.save()

        response = api_client.post(reverse('auth:signup-setup-password'), {
            'mobile_number': pending_user.mobile_number,
            'password': 'weakpassword',
            'confirm_password': 'weakpassword',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_add_email_conflict(self, api_client, pending_user, other_user):
        pending_user.is_mobile_verified = True
        pending_user.set_password('StrongPass1')
        pending_user.save()

        response = api_client.post(reverse('auth:signup-add-email'), {
            'mobile_number': pending_user.mobile_number,
            'email': other_user.email,
        })

        assert response.status_code == status.HTTP_409_CONFLICT


# =============================================================================
# OTP & Login
# =============================================================================

@pytest.mark.django_db
class TestOtpEndpoints:

    def test_request_otp_sms(self, api_client, sms_outbox):
        response = api_client.post(reverse('auth:request-otp'), {
            'type': OTPType.SMS,
            'mobile_number': '9999999999',
        })

        assert response.status_code == status.HTTP_200_OK
        assert response.data['expires_in'] == 300
        assert len(sms_outbox) == 1

    def test_request_otp_missing_identifier(self, api_client):
        response = api_client.post(reverse('auth:request-otp'), {'type': OTPType.EMAIL})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_verify_otp_requires_additional_verification(self, api_client):
        code = generate_otp(identifier='9999999999', otp_type=OTPType.SMS)

        response = api_client.post(reverse('auth:verify-otp'), {
            'type': OTPType.SMS,
            'mobile_number': '9999999999',
            'code': code,
        })

        assert response.status_code == status.HTTP_200_OK
        assert response.data['requires_additional_verification'] is True


@pytest.mark.django_db
class TestLogin:

    def test_login_mobile_otp(self, api_client, user):
        code = generate_otp(identifier=user.mobile_number, otp_type=OTPType.SMS)

        response = api_client.post(reverse('auth:login-mobile'), {
            'mobile_number': user.mobile_number,
            'otp_code': code,
        })

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['id'] == str(user.id)
        assert response.data['access_token']

    def test_login_mobile_password(self, api_client, user):
        response = api_client.post(reverse('auth:login-mobile-password'), {
            'mobile_number': user.mobile_number,
            'password': 'TestPass123',
        })

        assert response.status_code == status.HTTP_200_OK

    def test_login_email_invalid_credentials(self, api_client, user):
        response = api_client.post(reverse('auth:login-email'), {
            'email': user.email,
            'password': 'WrongPass123',
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_email_inactive(self, api_client, suspended_user):
        response = api_client.post(reverse('auth:login-email'), {
            'email': suspended_user.email,
            'password': 'TestPass123',
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'User account is not active'

    def test_login_without_password(self, api_client, pending_user):
        response = api_client.post(reverse('auth:login-mobile-password'), {
            'mobile_number': pending_user.mobile_number,
            'password': 'TestPass123',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_refresh_token(self, api_client, user):
        tokens = issue_tokens(user)

        response = api_client.post(reverse('auth:refresh-token'), {
            'refresh_token': tokens['refresh_token'],
        })

        assert response.status_code == status.HTTP_200_OK
        assert response.data['access_token']

    def test_refresh_token_invalid(self, api_client):
        response = api_client.post(reverse('auth:refresh-token'), {'refresh_token': 'garbage'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_logout_requires_auth(self, api_client):
        response = api_client.post(reverse('auth:logout'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_logout(self, authenticated_client):
        response = authenticated_client.post(reverse('auth:logout'))

        assert response.status_code == status.HTTP_200_OK


@pytest.mark.django_db
class TestPasswordReset:

    def test_request_reset_never_reveals(self, api_client):
        response = api_client.post(reverse('auth:request-password-reset'), {
            'email': 'nobody@example.com',
        })

        assert response.status_code == status.HTTP_200_OK

    def test_reset_invalid_token(self, api_client):
        response = api_client.post(reverse('auth:reset-password'), {
            'token': 'nope',
            'password': 'NewPass123',
            'confirm_password': 'NewPass123',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Current User
# =============================================================================

@pytest.mark.django_db
class TestProfile:
    """Tests for /api/users/*"""

    def test_get_profile(self, authenticated_client, user):
        response = authenticated_client.get(reverse('users:profile'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['mobile_number'] == user.mobile_number
        assert response.data['profile']['first_name'] == 'Test'

    def test_get_profile_unauthenticated(self, api_client):
        response = api_client.get(reverse('users:profile'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_update_profile(self, authenticated_client):
        response = authenticated_client.put(
            reverse('users:profile'),
            {'first_name': 'Updated', 'city': 'Pune'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['profile']['first_name'] == 'Updated'
        assert response.data['profile']['city'] == 'Pune'

    def test_update_payment_details(self, authenticated_client, user):
        response = authenticated_client.put(
            reverse('users:payment-details'),
            {'upi_id': 'testuser@okbank'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['upi_id'] == 'testuser@okbank'

    def test_update_payment_details_invalid_upi(self, authenticated_client):
        response = authenticated_client.put(
            reverse('users:payment-details'),
            {'upi_id': 'not a upi'},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_suspended_user_token_rejected(self, api_client, suspended_user):
        tokens = issue_tokens(suspended_user)
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access_token']}")

        response = api_client.get(reverse('users:profile'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
