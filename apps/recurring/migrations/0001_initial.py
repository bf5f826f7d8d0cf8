# Generated manually for the recurring app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('families', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='RecurringPayment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=14, validators=[MinValueValidator(Decimal('0.01'))])),
                ('frequency', models.CharField(choices=[('monthly', 'Monthly'), ('semi_annual', 'Semi-annual'), ('annual', 'Annual')], max_length=20)),
                ('start_date', models.DateField()),
                ('type', models.CharField(choices=[('payment', 'Payment'), ('debt', 'Debt'), ('loan', 'Loan')], default='payment', max_length=10)),
                ('color', models.CharField(blank=True, max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='recurring_payments_created', to=settings.AUTH_USER_MODEL)),
                ('family', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='recurring_payments', to='families.family')),
            ],
            options={
                'db_table': 'recurring_payments',
                'ordering': ['start_date', 'name'],
            },
        ),
        migrations.AddIndex(
            model_name='recurringpayment',
            index=models.Index(fields=['family', 'start_date'], name='recurring_family_start_idx'),
        ),
    ]
