from django.core.validators import MinValueValidator, MaxValueValidator, RegexValidator
from django.db import models
from django.db.models import Q, F
from decimal import Decimal, ROUND_HALF_UP
import uuid


hex_color_validator = RegexValidator(
    regex=r'^#[0-9A-Fa-f]{6}$',
    message='Color must be a hex code like #1A2B3C',
)


class BrandCategory(models.Model):
    """Grouping for partner brands (Food, Fashion, ...)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(null=True, blank=True)
    icon = models.CharField(max_length=100, null=True, blank=True)
    color = models.CharField(max_length=7, null=True, blank=True, validators=[hex_color_validator])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'brand_categories'
        ordering = ['name']
        verbose_name_plural = 'brand categories'

    def __str__(self):
        return self.name


class Brand(models.Model):
    """Partner merchant with its earn and redeem rules."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, db_index=True)
    description = models.TextField(blank=True, default='')
    logo_url = models.URLField(max_length=500, null=True, blank=True)
    category = models.ForeignKey(
        BrandCategory,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='brands',
    )
    earning_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('10.00'),
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))],
    )
    redemption_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('30.00'),
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))],
    )
    min_redemption_amount = models.PositiveIntegerField(default=1)
    max_redemption_amount = models.PositiveIntegerField(default=2000)
    brandwise_max_cap = models.PositiveIntegerField(default=2000)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'brands'
        ordering = ['name']
        indexes = [
            models.Index(fields=['is_active']),
            models.Index(fields=['category', 'is_active']),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(earning_percentage__gte=0) & Q(earning_percentage__lte=100),
                name='brand_earning_percentage_range',
            ),
            models.CheckConstraint(
                condition=Q(redemption_percentage__gte=0) & Q(redemption_percentage__lte=100),
                name='brand_redemption_percentage_range',
            ),
            models.CheckConstraint(
                condition=Q(max_redemption_amount__gte=F('min_redemption_amount')),
                name='brand_redemption_amount_order',
            ),
        ]

    def __str__(self):
        return self.name

    def coins_for_bill(self, bill_amount: Decimal) -> int:
        """Coins earned for a bill at this brand's earning percentage."""
        coins = Decimal(bill_amount) * self.earning_percentage / Decimal('100')
        return int(coins.quantize(Decimal('1'), rounding=ROUND_HALF_UP))
