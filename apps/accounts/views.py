from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import (
    UserSerializer,
    PaymentDetailsSerializer,
    InitialSignupSerializer,
    SignupOtpVerificationSerializer,
    PasswordSetupSerializer,
    SignupEmailSerializer,
    TokenSerializer,
    RequestOtpSerializer,
    VerifyOtpSerializer,
    MobileLoginSerializer,
    MobilePasswordLoginSerializer,
    EmailLoginSerializer,
    RefreshTokenSerializer,
    EmailSerializer,
    PasswordResetSerializer,
    ProfileUpdateSerializer,
    PaymentDetailsUpdateSerializer,
)
from .models import UserStatus
from .permissions import IsPlatformUser
from .services import (
    initial_signup,
    verify_signup_otp,
    setup_signup_password,
    add_signup_email,
    verify_signup_email,
    request_otp,
    verify_otp_flow,
    setup_password,
    mobile_login,
    mobile_password_login,
    email_login,
    refresh_tokens,
    issue_tokens,
    request_email_verification,
    verify_email_with_token,
    request_password_reset,
    reset_password_with_token,
    update_profile,
    update_payment_details,
    get_user,
    # Exceptions
    AccountsServiceError,
    UserAlreadyExistsError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidRefreshTokenError,
    InvalidOTPError,
)


# Most specific first; anything else derived from AccountsServiceError is a 400
ERROR_STATUS = (
    (InvalidOTPError, status.HTTP_401_UNAUTHORIZED),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (InactiveAccountError, status.HTTP_401_UNAUTHORIZED),
    (InvalidRefreshTokenError, status.HTTP_401_UNAUTHORIZED),
    (UserAlreadyExistsError, status.HTTP_409_CONFLICT),
)


def error_response(exc: AccountsServiceError) -> Response:
    for exc_class, code in ERROR_STATUS:
        if isinstance(exc, exc_class):
            return Response({'error': str(exc)}, status=code)
    return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)


def auth_payload(user, message: str) -> dict:
    return {
        'message': message,
        'user': UserSerializer(user).data,
        **issue_tokens(user),
    }


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    access_token = serializers.CharField()
    refresh_token = serializers.CharField()
    expires_in = serializers.IntegerField()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


class InitialSignupResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    mobile_number = serializers.CharField()
    requires_otp_verification = serializers.BooleanField()
    redirect_to_login = serializers.BooleanField()


class SignupStepResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user_id = serializers.UUIDField()
    requires_password_setup = serializers.BooleanField(required=False)
    requires_email_verification = serializers.BooleanField(required=False)
    account_activated = serializers.BooleanField(required=False)


class OtpRequestedResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    expires_in = serializers.IntegerField()


# =============================================================================
# Staged signup
# =============================================================================

@extend_schema(
    request=InitialSignupSerializer,
    responses={
        201: InitialSignupResponseSerializer,
        200: InitialSignupResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Start signup with name and mobile number. Sends an SMS OTP.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def signup_initial(request):
    """Start signup with name and mobile number."""
    serializer = InitialSignupSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        result = initial_signup(**serializer.validated_data)
    except AccountsServiceError as e:
        return error_response(e)

    if result['redirect_to_login']:
        return Response(result)
    return Response(result, status=status.HTTP_201_CREATED)


@extend_schema(
    request=SignupOtpVerificationSerializer,
    responses={
        200: SignupStepResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
    },
    description="Verify the signup SMS OTP.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def signup_verify_otp(request):
    """Verify signup OTP."""
    serializer = SignupOtpVerificationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = verify_signup_otp(**serializer.validated_data)
    except AccountsServiceError as e:
        return error_response(e)

    return Response({
        'message': 'Mobile number verified successfully. Please set up your password.',
        'user_id': user.id,
        'requires_password_setup': True,
    })


@extend_schema(
    request=PasswordSetupSerializer,
    responses={
        200: SignupStepResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Set the account password. Accounts without email are activated and receive tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def signup_setup_password(request):
    """Set password during signup."""
    serializer = PasswordSetupSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = setup_signup_password(**serializer.validated_data)
    except AccountsServiceError as e:
        return error_response(e)

    if user.status == UserStatus.ACTIVE:
        payload = auth_payload(user, 'Password set successfully. Account activated.')
        payload.update({'user_id': user.id, 'requires_email_verification': False})
        return Response(payload)

    return Response({
        'message': 'Password set successfully. Please verify your email to activate account.',
        'user_id': user.id,
        'requires_email_verification': True,
    })


@extend_schema(
    request=SignupEmailSerializer,
    responses={
        200: SignupStepResponseSerializer,
        400: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
    },
    description="Attach an email to the signup and send verification.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def signup_add_email(request):
    """Add email during signup."""
    serializer = SignupEmailSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = add_signup_email(**serializer.validated_data)
    except AccountsServiceError as e:
        return error_response(e)

    return Response({
        'message': 'Email added successfully. Please check your email for verification.',
        'user_id': user.id,
        'account_activated': False,
    })


@extend_schema(
    request=TokenSerializer,
    responses={
        200: TokensResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Verify signup email with token and activate the account.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def signup_verify_email(request):
    """Verify email and activate account."""
    serializer = TokenSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = verify_signup_email(token=serializer.validated_data['token'])
    except AccountsServiceError as e:
        return error_response(e)

    payload = auth_payload(user, 'Email verified successfully. Account activated.')
    payload.update({'user_id': user.id, 'account_activated': True})
    return Response(payload)


# =============================================================================
# OTP
# =============================================================================

@extend_schema(
    request=RequestOtpSerializer,
    responses={
        200: OtpRequestedResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Send an OTP over SMS or email.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def request_otp_view(request):
    """Send an OTP."""
    serializer = RequestOtpSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        expires_in = request_otp(
            otp_type=data['type'],
            mobile_number=data.get('mobile_number'),
            email=data.get('email'),
        )
    except AccountsServiceError as e:
        return error_response(e)

    return Response({
        'message': f"OTP sent successfully to your {data['type'].lower()}",
        'expires_in': expires_in,
    })


@extend_schema(
    request=VerifyOtpSerializer,
    responses={
        200: TokensResponseSerializer,
        401: ErrorResponseSerializer,
    },
    description="Verify an OTP. Returns tokens once both mobile and email are verified.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def verify_otp_view(request):
    """Verify an OTP."""
    serializer = VerifyOtpSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        user = verify_otp_flow(
            otp_type=data['type'],
            code=data['code'],
            mobile_number=data.get('mobile_number'),
            email=data.get('email'),
        )
    except AccountsServiceError as e:
        return error_response(e)

    if user is not None and user.status == UserStatus.ACTIVE:
        return Response(auth_payload(user, f"{data['type']} verified successfully"))

    return Response({
        'message': f"{data['type']} verified successfully",
        'requires_additional_verification': True,
        'user': UserSerializer(user).data if user is not None else None,
    })


# =============================================================================
# Login
# =============================================================================

@extend_schema(
    request=MobileLoginSerializer,
    responses={
        200: TokensResponseSerializer,
        401: ErrorResponseSerializer,
    },
    description="Login with mobile number and OTP.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login_mobile(request):
    """Login with mobile OTP."""
    serializer = MobileLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = mobile_login(**serializer.validated_data)
    except AccountsServiceError as e:
        return error_response(e)

    return Response(auth_payload(user, 'Login successful'))


@extend_schema(
    request=MobilePasswordLoginSerializer,
    responses={
        200: TokensResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
    },
    description="Login with mobile number and password.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login_mobile_password(request):
    """Login with mobile number and password."""
    serializer = MobilePasswordLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = mobile_password_login(**serializer.validated_data)
    except AccountsServiceError as e:
        return error_response(e)

    return Response(auth_payload(user, 'Login successful'))


@extend_schema(
    request=EmailLoginSerializer,
    responses={
        200: TokensResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
    },
    description="Login with email and password.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login_email(request):
    """Login with email and password."""
    serializer = EmailLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = email_login(**serializer.validated_data)
    except AccountsServiceError as e:
        return error_response(e)

    return Response(auth_payload(user, 'Login successful'))


@extend_schema(
    request=RefreshTokenSerializer,
    responses={
        200: TokensResponseSerializer,
        401: ErrorResponseSerializer,
    },
    description="Exchange a refresh token for a new token pair.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def refresh_token(request):
    """Refresh JWT tokens."""
    serializer = RefreshTokenSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        tokens = refresh_tokens(refresh_token=serializer.validated_data['refresh_token'])
    except AccountsServiceError as e:
        return error_response(e)

    return Response(tokens)


@extend_schema(
    request=None,
    responses={200: MessageResponseSerializer},
    description="Logout. Clients discard their tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    """Logout."""
    return Response({'message': 'Logged out successfully'})


# =============================================================================
# Password & email
# =============================================================================

@extend_schema(
    request=PasswordSetupSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Set a password for an account created through OTP verification.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def setup_password_view(request):
    """Set password for OTP-created account."""
    serializer = PasswordSetupSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        setup_password(**serializer.validated_data)
    except AccountsServiceError as e:
        return error_response(e)

    return Response({'message': 'Password set successfully'})


@extend_schema(
    request=TokenSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Verify email address with verification token.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def verify_email(request):
    """Verify email with token."""
    serializer = TokenSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = verify_email_with_token(token=serializer.validated_data['token'])
    except AccountsServiceError as e:
        return error_response(e)

    return Response({
        'message': 'Email verified successfully',
        'user': UserSerializer(user).data,
        'requires_password_setup': not user.has_usable_password(),
    })


@extend_schema(
    request=EmailSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Send a new email verification token.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def request_email_verification_view(request):
    """Request email verification."""
    serializer = EmailSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        request_email_verification(email=serializer.validated_data['email'])
    except AccountsServiceError as e:
        return error_response(e)

    return Response({'message': 'Email verification sent successfully'})


@extend_schema(
    request=EmailSerializer,
    responses={200: MessageResponseSerializer},
    description="Request a password reset email. Always returns success for security.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def request_password_reset_view(request):
    """Request password reset email."""
    serializer = EmailSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    request_password_reset(email=serializer.validated_data['email'])

    # Don't reveal if email exists
    return Response({'message': 'Password reset email sent if account exists'})


@extend_schema(
    request=PasswordResetSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Reset password with token.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def reset_password(request):
    """Reset password with token."""
    serializer = PasswordResetSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        reset_password_with_token(**serializer.validated_data)
    except AccountsServiceError as e:
        return error_response(e)

    return Response({'message': 'Password reset successfully'})


# =============================================================================
# Current user
# =============================================================================

@extend_schema(
    methods=['GET'],
    responses={200: UserSerializer},
    description="Get the current user with profile and payment details.",
    tags=['users'],
)
@extend_schema(
    methods=['PUT', 'PATCH'],
    request=ProfileUpdateSerializer,
    responses={200: UserSerializer, 400: ErrorResponseSerializer},
    description="Update the current user's profile.",
    tags=['users'],
)
@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsPlatformUser])
def profile(request):
    """Get or update current user profile."""
    if request.method == 'GET':
        return Response(UserSerializer(request.user).data)

    serializer = ProfileUpdateSerializer(data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    update_profile(user=request.user, **serializer.validated_data)

    return Response(UserSerializer(get_user(user_id=request.user.id)).data)


@extend_schema(
    request=PaymentDetailsUpdateSerializer,
    responses={200: PaymentDetailsSerializer, 400: ErrorResponseSerializer},
    description="Update where redeemed coins are paid out.",
    tags=['users'],
)
@api_view(['PUT'])
@permission_classes([IsPlatformUser])
def payment_details(request):
    """Update payment details."""
    serializer = PaymentDetailsUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    details = update_payment_details(user=request.user, **serializer.validated_data)
    return Response(PaymentDetailsSerializer(details).data)
