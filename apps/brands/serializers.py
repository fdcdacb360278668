from decimal import Decimal
from rest_framework import serializers

from .models import Brand, BrandCategory, hex_color_validator


class BrandCategorySerializer(serializers.ModelSerializer):
    """Serializer for brand categories."""

    class Meta:
        model = BrandCategory
        fields = ['id', 'name', 'description', 'icon', 'color', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class BrandCategoryWriteSerializer(serializers.Serializer):
    """Input for creating/updating categories. Uniqueness is checked in services."""

    name = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    icon = serializers.CharField(max_length=100, required=False, allow_null=True, allow_blank=True)
    color = serializers.CharField(
        max_length=7,
        required=False,
        allow_null=True,
        validators=[hex_color_validator],
    )


class BrandSerializer(serializers.ModelSerializer):
    """Main serializer for brands."""

    category = BrandCategorySerializer(read_only=True)
    category_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = Brand
        fields = [
            'id',
            'name',
            'description',
            'logo_url',
            'category_id',
            'category',
            'earning_percentage',
            'redemption_percentage',
            'min_redemption_amount',
            'max_redemption_amount',
            'brandwise_max_cap',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class BrandMinimalSerializer(serializers.ModelSerializer):
    """Brand reference embedded in transactions."""

    class Meta:
        model = Brand
        fields = ['id', 'name', 'logo_url', 'earning_percentage', 'redemption_percentage']
        read_only_fields = fields


class BrandWriteSerializer(serializers.Serializer):
    """
    Input for creating/updating brands.

    Field-level bounds only; cross-field rules (percentage sum,
    min/max ordering) are applied to merged values in services.
    """

    name = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True)
    logo_url = serializers.URLField(max_length=500, required=False, allow_null=True)
    category_id = serializers.UUIDField(required=False, allow_null=True)
    earning_percentage = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=Decimal('0'),
        max_value=Decimal('100'),
        required=False,
    )
    redemption_percentage = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=Decimal('0'),
        max_value=Decimal('100'),
        required=False,
    )
    min_redemption_amount = serializers.IntegerField(min_value=1, required=False)
    max_redemption_amount = serializers.IntegerField(min_value=1, required=False)
    brandwise_max_cap = serializers.IntegerField(min_value=0, required=False)
    is_active = serializers.BooleanField(required=False)


class BrandSearchSerializer(serializers.Serializer):
    """Query parameters for brand search."""

    query = serializers.CharField(required=False, allow_blank=True)
    category_id = serializers.UUIDField(required=False)
    is_active = serializers.BooleanField(required=False, allow_null=True, default=None)
    page = serializers.IntegerField(min_value=1, required=False, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=100, required=False, default=20)


class BrandListResponseSerializer(serializers.Serializer):
    brands = BrandSerializer(many=True)
    total = serializers.IntegerField()
    page = serializers.IntegerField()
    limit = serializers.IntegerField()
    total_pages = serializers.IntegerField()
