from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.db.models import Q
from decimal import Decimal
import uuid


class TransactionType(models.TextChoices):
    EARN = 'EARN', 'Earn'
    REDEEM = 'REDEEM', 'Redeem'
    WELCOME_BONUS = 'WELCOME_BONUS', 'Welcome bonus'
    ADJUSTMENT = 'ADJUSTMENT', 'Adjustment'


class TransactionStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    APPROVED = 'APPROVED', 'Approved'
    REJECTED = 'REJECTED', 'Rejected'
    PROCESSED = 'PROCESSED', 'Processed'
    PAID = 'PAID', 'Paid'


class CoinBalance(models.Model):
    """Running coin totals for a user. Locked with select_for_update on change."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='coin_balance',
    )
    balance = models.IntegerField(default=0)
    total_earned = models.IntegerField(default=0)
    total_redeemed = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'coin_balances'
        constraints = [
            models.CheckConstraint(
                condition=Q(balance__gte=0),
                name='coin_balance_non_negative',
            ),
        ]

    def __str__(self):
        return f"{self.user} - {self.balance} coins"

    def credit(self, amount: int) -> None:
        self.balance += amount
        self.total_earned += amount

    def debit(self, amount: int) -> None:
        self.balance -= amount
        self.total_redeemed += amount


class CoinTransaction(models.Model):
    """
    A single coin movement.

    EARN and WELCOME_BONUS amounts are positive, REDEEM amounts are stored
    negative, ADJUSTMENT may carry either sign.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='coin_transactions',
    )
    brand = models.ForeignKey(
        'brands.Brand',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='transactions',
    )
    type = models.CharField(max_length=20, choices=TransactionType.choices)
    status = models.CharField(
        max_length=20,
        choices=TransactionStatus.choices,
        default=TransactionStatus.PENDING,
    )
    amount = models.IntegerField()

    # Bill details
    bill_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.01')), MaxValueValidator(Decimal('100000'))],
    )
    coins_earned = models.PositiveIntegerField(null=True, blank=True)
    coins_redeemed = models.PositiveIntegerField(null=True, blank=True)
    bill_date = models.DateField(null=True, blank=True)
    receipt_url = models.URLField(max_length=500, null=True, blank=True)
    notes = models.TextField(blank=True, default='')
    admin_notes = models.TextField(blank=True, default='')
    description = models.CharField(max_length=255, blank=True, default='')
    processed_at = models.DateTimeField(null=True, blank=True)

    # Payout details (REDEEM only)
    transaction_id = models.CharField(max_length=100, unique=True, null=True, blank=True)
    payment_method = models.CharField(max_length=50, blank=True, default='')
    payment_amount = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    payment_processed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'coin_transactions'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'type', 'status']),
            models.Index(fields=['status', 'type']),
            models.Index(fields=['brand', 'type']),
            models.Index(fields=['-created_at']),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['user'],
                condition=Q(type='WELCOME_BONUS'),
                name='unique_welcome_bonus_per_user',
            ),
            models.CheckConstraint(
                condition=~Q(amount=0),
                name='coin_transaction_amount_non_zero',
            ),
        ]

    def __str__(self):
        return f"{self.type} {self.amount} ({self.status})"

    @property
    def coins(self) -> int:
        """Absolute coin amount."""
        return abs(self.amount)

    @property
    def is_pending(self) -> bool:
        return self.status == TransactionStatus.PENDING
