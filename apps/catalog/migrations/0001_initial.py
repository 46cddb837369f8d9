# Generated manually for the print shop catalog app

import uuid
from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Service',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('category', models.CharField(choices=[('dynamic', 'Dynamic'), ('standard', 'Standard')], default='standard', max_length=20)),
                ('type', models.CharField(choices=[('document', 'Document Printing'), ('tarpaulin', 'Tarpaulin Printing'), ('lamination', 'Lamination'), ('standard', 'Standard')], default='standard', max_length=20)),
                ('base_price', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.00'))])),
                ('pricing_rules', models.JSONField(blank=True, null=True)),
                ('active', models.BooleanField(default=True)),
                ('image_url', models.URLField(blank=True)),
                ('featured', models.BooleanField(default=False)),
                ('display_order', models.PositiveIntegerField(default=0)),
                ('online_available', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'services',
                'ordering': ['display_order', 'name'],
                'indexes': [
                    models.Index(fields=['type', 'active'], name='services_type_active_idx'),
                    models.Index(fields=['category', 'active'], name='services_category_active_idx'),
                ],
            },
        ),
    ]
