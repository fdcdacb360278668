from django.core.validators import RegexValidator
from rest_framework import serializers

from .models import User, UserProfile, PaymentDetails, AuthProvider, OTPType


mobile_number_validator = RegexValidator(
    regex=r'^\+?[0-9]{10,15}$',
    message='Enter a valid mobile number (10-15 digits, optional leading +).',
)


class MobileNumberField(serializers.CharField):
    def __init__(self, **kwargs):
        kwargs.setdefault('max_length', 20)
        super().__init__(**kwargs)
        self.validators.append(mobile_number_validator)


class OtpCodeField(serializers.CharField):
    def __init__(self, **kwargs):
        kwargs.setdefault('min_length', 4)
        kwargs.setdefault('max_length', 6)
        super().__init__(**kwargs)


# =============================================================================
# Output Serializers
# =============================================================================

class UserProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserProfile
        fields = [
            'first_name',
            'last_name',
            'date_of_birth',
            'gender',
            'street',
            'city',
            'state',
            'postal_code',
            'country',
        ]


class PaymentDetailsSerializer(serializers.ModelSerializer):
    class Meta:
        model = PaymentDetails
        fields = ['upi_id', 'mobile_number']


class AuthProviderSerializer(serializers.ModelSerializer):
    class Meta:
        model = AuthProvider
        fields = ['id', 'provider', 'email', 'is_active', 'created_at']
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    """User with profile and payment details."""

    profile = UserProfileSerializer(read_only=True)
    payment_details = PaymentDetailsSerializer(read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'mobile_number',
            'email',
            'status',
            'is_mobile_verified',
            'is_email_verified',
            'has_welcome_bonus_processed',
            'roles',
            'last_login',
            'created_at',
            'updated_at',
            'profile',
            'payment_details',
        ]
        read_only_fields = fields


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    full_name = serializers.CharField(source='get_full_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'mobile_number', 'email', 'full_name']
        read_only_fields = fields


# =============================================================================
# Input Serializers
# =============================================================================

class InitialSignupSerializer(serializers.Serializer):
    first_name = serializers.CharField(min_length=2, max_length=50)
    last_name = serializers.CharField(min_length=2, max_length=50)
    mobile_number = MobileNumberField()


class SignupOtpVerificationSerializer(serializers.Serializer):
    mobile_number = MobileNumberField()
    otp_code = OtpCodeField()


class PasswordSetupSerializer(serializers.Serializer):
    mobile_number = MobileNumberField()
    password = serializers.CharField(min_length=8, style={'input_type': 'password'})
    confirm_password = serializers.CharField(style={'input_type': 'password'})


class SignupEmailSerializer(serializers.Serializer):
    mobile_number = MobileNumberField()
    email = serializers.EmailField()


class TokenSerializer(serializers.Serializer):
    token = serializers.CharField()


class RequestOtpSerializer(serializers.Serializer):
    """
    Request an OTP over SMS or email.

    The identifier matching ``type`` is required.
    """

    type = serializers.ChoiceField(choices=OTPType.choices)
    mobile_number = MobileNumberField(required=False)
    email = serializers.EmailField(required=False)

    def validate(self, attrs):
        if attrs['type'] == OTPType.SMS and not attrs.get('mobile_number'):
            raise serializers.ValidationError({
                'mobile_number': 'Mobile number is required for mobile OTP'
            })
        if attrs['type'] == OTPType.EMAIL and not attrs.get('email'):
            raise serializers.ValidationError({
                'email': 'Email is required for email OTP'
            })
        return attrs


class VerifyOtpSerializer(RequestOtpSerializer):
    code = OtpCodeField()


class MobileLoginSerializer(serializers.Serializer):
    mobile_number = MobileNumberField()
    otp_code = OtpCodeField()


class MobilePasswordLoginSerializer(serializers.Serializer):
    mobile_number = MobileNumberField()
    password = serializers.CharField(style={'input_type': 'password'})


class EmailLoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(style={'input_type': 'password'})


class RefreshTokenSerializer(serializers.Serializer):
    refresh_token = serializers.CharField()


class EmailSerializer(serializers.Serializer):
    email = serializers.EmailField()


class PasswordResetSerializer(serializers.Serializer):
    token = serializers.CharField()
    password = serializers.CharField(style={'input_type': 'password'})
    confirm_password = serializers.CharField(style={'input_type': 'password'})


class ProfileUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserProfile
        fields = UserProfileSerializer.Meta.fields
        extra_kwargs = {field: {'required': False} for field in fields}


class PaymentDetailsUpdateSerializer(serializers.Serializer):
    upi_id = serializers.RegexField(
        regex=r'^[\w.\-]{2,256}@[a-zA-Z]{2,64}$',
        max_length=100,
        required=False,
        allow_blank=True,
        error_messages={'invalid': 'Enter a valid UPI ID (e.g. name@bank).'},
    )
    mobile_number = serializers.CharField(max_length=15, required=False, allow_blank=True)
