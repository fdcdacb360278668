# Generated manually for partner brands

import uuid
from decimal import Decimal
from django.core.validators import MinValueValidator, MaxValueValidator, RegexValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='BrandCategory',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100, unique=True)),
                ('description', models.TextField(blank=True, null=True)),
                ('icon', models.CharField(blank=True, max_length=100, null=True)),
                ('color', models.CharField(blank=True, max_length=7, null=True, validators=[RegexValidator(message='Color must be a hex code like #1A2B3C', regex='^#[0-9A-Fa-f]{6}$')])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'brand_categories',
                'ordering': ['name'],
                'verbose_name_plural': 'brand categories',
            },
        ),
        migrations.CreateModel(
            name='Brand',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(db_index=True, max_length=100)),
                ('description', models.TextField(blank=True, default='')),
                ('logo_url', models.URLField(blank=True, max_length=500, null=True)),
                ('earning_percentage', models.DecimalField(decimal_places=2, default=Decimal('10.00'), max_digits=5, validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))])),
                ('redemption_percentage', models.DecimalField(decimal_places=2, default=Decimal('30.00'), max_digits=5, validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))])),
                ('min_redemption_amount', models.PositiveIntegerField(default=1)),
                ('max_redemption_amount', models.PositiveIntegerField(default=2000)),
                ('brandwise_max_cap', models.PositiveIntegerField(default=2000)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='brands', to='brands.brandcategory')),
            ],
            options={
                'db_table': 'brands',
                'ordering': ['name'],
            },
        ),
        migrations.AddIndex(
            model_name='brand',
            index=models.Index(fields=['is_active'], name='brands_is_acti_8e21c5_idx'),
        ),
        migrations.AddIndex(
            model_name='brand',
            index=models.Index(fields=['category', 'is_active'], name='brands_categor_2b7f90_idx'),
        ),
        migrations.AddConstraint(
            model_name='brand',
            constraint=models.CheckConstraint(condition=models.Q(('earning_percentage__gte', 0), ('earning_percentage__lte', 100)), name='brand_earning_percentage_range'),
        ),
        migrations.AddConstraint(
            model_name='brand',
            constraint=models.CheckConstraint(condition=models.Q(('redemption_percentage__gte', 0), ('redemption_percentage__lte', 100)), name='brand_redemption_percentage_range'),
        ),
        migrations.AddConstraint(
            model_name='brand',
            constraint=models.CheckConstraint(condition=models.Q(('max_redemption_amount__gte', models.F('min_redemption_amount'))), name='brand_redemption_amount_order'),
        ),
    ]
