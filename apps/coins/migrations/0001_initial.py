# Generated manually for coin balances and transactions

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('brands', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='CoinBalance',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('balance', models.IntegerField(default=0)),
                ('total_earned', models.IntegerField(default=0)),
                ('total_redeemed', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='coin_balance', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'coin_balances',
            },
        ),
        migrations.CreateModel(
            name='CoinTransaction',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('type', models.CharField(choices=[('EARN', 'Earn'), ('REDEEM', 'Redeem'), ('WELCOME_BONUS', 'Welcome bonus'), ('ADJUSTMENT', 'Adjustment')], max_length=20)),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('APPROVED', 'Approved'), ('REJECTED', 'Rejected'), ('PROCESSED', 'Processed'), ('PAID', 'Paid')], default='PENDING', max_length=20)),
                ('amount', models.IntegerField()),
                ('bill_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[MinValueValidator(Decimal('0.01')), MaxValueValidator(Decimal('100000'))])),
                ('coins_earned', models.PositiveIntegerField(blank=True, null=True)),
                ('coins_redeemed', models.PositiveIntegerField(blank=True, null=True)),
                ('bill_date', models.DateField(blank=True, null=True)),
                ('receipt_url', models.URLField(blank=True, max_length=500, null=True)),
                ('notes', models.TextField(blank=True, default='')),
                ('admin_notes', models.TextField(blank=True, default='')),
                ('description', models.CharField(blank=True, default='', max_length=255)),
                ('processed_at', models.DateTimeField(blank=True, null=True)),
                ('transaction_id', models.CharField(blank=True, max_length=100, null=True, unique=True)),
                ('payment_method', models.CharField(blank=True, default='', max_length=50)),
                ('payment_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('payment_processed_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('brand', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='transactions', to='brands.brand')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='coin_transactions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'coin_transactions',
                'ordering': ['-created_at'],
            },
        ),
        # Constraints for CoinBalance
        migrations.AddConstraint(
            model_name='coinbalance',
            constraint=models.CheckConstraint(condition=models.Q(('balance__gte', 0)), name='coin_balance_non_negative'),
        ),
        # Indexes for CoinTransaction
        migrations.AddIndex(
            model_name='cointransaction',
            index=models.Index(fields=['user', 'type', 'status'], name='coin_transa_user_id_4b8e13_idx'),
        ),
        migrations.AddIndex(
            model_name='cointransaction',
            index=models.Index(fields=['status', 'type'], name='coin_transa_status_9c2a57_idx'),
        ),
        migrations.AddIndex(
            model_name='cointransaction',
            index=models.Index(fields=['brand', 'type'], name='coin_transa_brand_i_e07d61_idx'),
        ),
        migrations.AddIndex(
            model_name='cointransaction',
            index=models.Index(fields=['-created_at'], name='coin_transa_created_5f3b92_idx'),
        ),
        # Constraints for CoinTransaction
        migrations.AddConstraint(
            model_name='cointransaction',
            constraint=models.UniqueConstraint(condition=models.Q(('type', 'WELCOME_BONUS')), fields=('user',), name='unique_welcome_bonus_per_user'),
        ),
        migrations.AddConstraint(
            model_name='cointransaction',
            constraint=models.CheckConstraint(condition=models.Q(('amount', 0), _negated=True), name='coin_transaction_amount_non_zero'),
        ),
    ]
