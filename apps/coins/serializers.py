from decimal import Decimal

from rest_framework import serializers

from apps.brands.serializers import BrandMinimalSerializer

from .models import CoinBalance, CoinTransaction, TransactionType, TransactionStatus


class CoinBalanceSerializer(serializers.ModelSerializer):
    class Meta:
        model = CoinBalance
        fields = ['balance', 'total_earned', 'total_redeemed', 'updated_at']
        read_only_fields = fields


class CoinTransactionSerializer(serializers.ModelSerializer):
    """Transaction as shown in the user's history."""

    brand = BrandMinimalSerializer(read_only=True)

    class Meta:
        model = CoinTransaction
        fields = [
            'id',
            'type',
            'status',
            'amount',
            'brand',
            'bill_amount',
            'coins_earned',
            'coins_redeemed',
            'bill_date',
            'receipt_url',
            'notes',
            'admin_notes',
            'description',
            'processed_at',
            'transaction_id',
            'payment_method',
            'payment_amount',
            'payment_processed_at',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class TransactionUserSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    mobile_number = serializers.CharField()
    email = serializers.EmailField(allow_null=True)
    full_name = serializers.SerializerMethodField()

    def get_full_name(self, user):
        profile = getattr(user, 'profile', None)
        if profile is None:
            return ''
        return f"{profile.first_name} {profile.last_name}".strip()


class AdminCoinTransactionSerializer(CoinTransactionSerializer):
    """Transaction with its owner, for the admin portal."""

    user = TransactionUserSerializer(read_only=True)

    class Meta(CoinTransactionSerializer.Meta):
        fields = CoinTransactionSerializer.Meta.fields + ['user']
        read_only_fields = fields


# =============================================================================
# Input serializers
# =============================================================================

class EarnRequestSerializer(serializers.Serializer):
    brand_id = serializers.UUIDField()
    bill_amount = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.01'),
        max_value=Decimal('100000'),
    )
    bill_date = serializers.DateField()
    receipt_url = serializers.URLField(max_length=500, required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class RedeemRequestSerializer(serializers.Serializer):
    brand_id = serializers.UUIDField()
    bill_amount = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.01'),
        max_value=Decimal('100000'),
    )
    coins_to_redeem = serializers.IntegerField(min_value=1)
    bill_date = serializers.DateField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class AdminNotesSerializer(serializers.Serializer):
    """Approve/reject body; rejections require notes (checked by the service)."""

    admin_notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ProcessPaymentSerializer(serializers.Serializer):
    payment_transaction_id = serializers.CharField(max_length=100)
    payment_method = serializers.CharField(max_length=50)
    payment_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    admin_notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class WelcomeBonusRequestSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    mobile_number = serializers.CharField(max_length=20, required=False)


class AdjustmentSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    amount = serializers.IntegerField()
    description = serializers.CharField(max_length=255)
    reason = serializers.CharField(required=False, allow_blank=True)

    def validate_amount(self, value):
        if value == 0:
            raise serializers.ValidationError("Amount must be non-zero")
        return value


class TransactionFilterSerializer(serializers.Serializer):
    """Query parameters for the admin transaction list."""

    type = serializers.ChoiceField(choices=TransactionType.choices, required=False)
    status = serializers.ChoiceField(choices=TransactionStatus.choices, required=False)
    user_id = serializers.UUIDField(required=False)
    brand_id = serializers.UUIDField(required=False)


class PendingFilterSerializer(serializers.Serializer):
    type = serializers.ChoiceField(
        choices=[TransactionType.EARN, TransactionType.REDEEM],
        required=False,
    )


class DateRangeSerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        start, end = attrs.get('start_date'), attrs.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError("start_date must be before end_date")
        return attrs


# =============================================================================
# Response serializers
# =============================================================================

class BalanceSummarySerializer(serializers.Serializer):
    balance = serializers.IntegerField()
    total_earned = serializers.IntegerField()
    total_redeemed = serializers.IntegerField()
    pending_earn_count = serializers.IntegerField()
    pending_redeem_count = serializers.IntegerField()
    total_transactions = serializers.IntegerField()
    last_updated = serializers.DateTimeField()


class WelcomeBonusResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    coins_awarded = serializers.IntegerField()
    new_balance = serializers.IntegerField()
    transaction_id = serializers.UUIDField()


class TransactionStatsSerializer(serializers.Serializer):
    total_users = serializers.IntegerField()
    total_coins_in_circulation = serializers.IntegerField()
    pending_earn_requests = serializers.IntegerField()
    pending_redeem_requests = serializers.IntegerField()
    total_earned = serializers.IntegerField()
    total_redeemed = serializers.IntegerField()
    welcome_bonuses_given = serializers.IntegerField()


class PaymentStatsSerializer(serializers.Serializer):
    total_paid = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    average_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    payment_methods = serializers.DictField(child=serializers.IntegerField())


class PaymentSummarySerializer(serializers.Serializer):
    transaction_id = serializers.UUIDField()
    user_id = serializers.UUIDField()
    user_name = serializers.CharField()
    user_mobile_number = serializers.CharField()
    user_email = serializers.EmailField(allow_null=True)
    upi_id = serializers.CharField(allow_null=True)
    brand_name = serializers.CharField(allow_null=True)
    coin_amount = serializers.IntegerField()
    payment_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    payment_method = serializers.CharField()
    payment_transaction_id = serializers.CharField()
    status = serializers.CharField()
    admin_notes = serializers.CharField(allow_blank=True)
    created_at = serializers.DateTimeField()
    payment_processed_at = serializers.DateTimeField()
