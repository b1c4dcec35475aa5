# Generated manually for tours

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Registration',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('email', models.EmailField(db_index=True, max_length=254, verbose_name='Email')),
                ('full_name', models.CharField(max_length=200, verbose_name='Full name')),
                ('phone', models.CharField(blank=True, max_length=50, verbose_name='Phone')),
                ('city', models.CharField(blank=True, max_length=100, verbose_name='City')),
                ('state', models.CharField(blank=True, max_length=100, verbose_name='State')),
                ('bike_year', models.CharField(blank=True, max_length=10, verbose_name='Bike year')),
                ('bike_model', models.CharField(blank=True, max_length=100, verbose_name='Bike model')),
                ('has_pillion', models.BooleanField(default=False, verbose_name='Riding with pillion')),
                ('deposit_paid', models.BooleanField(default=False, verbose_name='Deposit paid')),
                ('balance', models.DecimalField(decimal_places=2, default=0, max_digits=10, verbose_name='Balance')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('confirmed', 'Confirmed'), ('cancelled', 'Cancelled')], db_index=True, default='pending', max_length=20, verbose_name='Status')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='tour_registrations', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Registration',
                'verbose_name_plural': 'Registrations',
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='WaitlistEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('email', models.EmailField(max_length=254, verbose_name='Email')),
                ('full_name', models.CharField(max_length=200, verbose_name='Full name')),
                ('phone', models.CharField(blank=True, max_length=50, verbose_name='Phone')),
                ('city', models.CharField(blank=True, max_length=100, verbose_name='City')),
                ('state', models.CharField(blank=True, max_length=100, verbose_name='State')),
                ('bike_year', models.CharField(blank=True, max_length=10, verbose_name='Bike year')),
                ('bike_model', models.CharField(blank=True, max_length=100, verbose_name='Bike model')),
                ('event_name', models.CharField(blank=True, max_length=200, verbose_name='Event name')),
                ('list_type', models.CharField(choices=[('waitlist', 'Waitlist'), ('interest', 'Interest')], default='waitlist', max_length=20, verbose_name='List type')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('contacted', 'Contacted'), ('closed', 'Closed')], default='pending', max_length=20, verbose_name='Status')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='tour_waitlist_entries', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Waitlist entry',
                'verbose_name_plural': 'Waitlist entries',
                'ordering': ['created_at'],
            },
        ),
    ]
