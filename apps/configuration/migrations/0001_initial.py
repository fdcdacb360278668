# Generated manually for runtime configuration

import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='GlobalConfig',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('key', models.CharField(max_length=100, unique=True)),
                ('value', models.TextField()),
                ('description', models.CharField(blank=True, default='', max_length=200)),
                ('type', models.CharField(choices=[('string', 'String'), ('number', 'Number'), ('boolean', 'Boolean'), ('json', 'JSON')], default='string', max_length=20)),
                ('is_editable', models.BooleanField(default=True)),
                ('category', models.CharField(blank=True, choices=[('transaction', 'Transaction'), ('brand', 'Brand'), ('user', 'User'), ('security', 'Security')], max_length=20, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'global_configs',
                'ordering': ['category', 'key'],
            },
        ),
        migrations.AddIndex(
            model_name='globalconfig',
            index=models.Index(fields=['category'], name='global_conf_categor_6a3d18_idx'),
        ),
    ]
