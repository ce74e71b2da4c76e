# Generated migration for core app

import uuid
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='AppSettings',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('clinic_name', models.CharField(blank=True, default='', max_length=255)),
                ('provincial_tax_label', models.CharField(default='QST', max_length=50)),
                ('provincial_tax_rate', models.DecimalField(decimal_places=4, default=Decimal('9.975'), max_digits=7)),
                ('federal_tax_label', models.CharField(default='GST', max_length=50)),
                ('federal_tax_rate', models.DecimalField(decimal_places=4, default=Decimal('5'), max_digits=7)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'App Settings',
                'verbose_name_plural': 'App Settings',
                'db_table': 'app_settings',
            },
        ),
    ]
