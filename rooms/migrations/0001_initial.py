# Generated manually for the initial schema

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models

from core.constants import AssetCategory, AssetCondition, PricingPeriod, RoomStatus


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('blocks', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Asset',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('category', models.CharField(choices=AssetCategory.CHOICES, default='OTHER', max_length=20)),
                ('description', models.TextField(blank=True)),
                ('serial_number', models.CharField(blank=True, max_length=100)),
                ('purchase_date', models.DateField(blank=True, null=True)),
                ('warranty_expiry', models.DateField(blank=True, null=True)),
                ('last_inspected', models.DateField(blank=True, null=True)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Asset',
                'verbose_name_plural': 'Assets',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='RoomType',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text="Code, e.g. 'DELUXE'", max_length=50, unique=True)),
                ('display_name', models.CharField(max_length=100)),
                ('description', models.TextField(blank=True)),
                ('base_price', models.DecimalField(decimal_places=2, default=0, max_digits=10, validators=[django.core.validators.MinValueValidator(0)])),
                ('max_capacity', models.PositiveIntegerField(default=1)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Room Type',
                'verbose_name_plural': 'Room Types',
                'ordering': ['display_name'],
            },
        ),
        migrations.CreateModel(
            name='Room',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('number', models.CharField(help_text="e.g., '101', 'A-12'", max_length=20)),
                ('status', models.CharField(choices=RoomStatus.CHOICES, default='AVAILABLE', max_length=20)),
                ('floor', models.IntegerField(default=1)),
                ('capacity', models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ('price_per_night', models.DecimalField(decimal_places=2, help_text='Price for one pricing period', max_digits=10, validators=[django.core.validators.MinValueValidator(0)])),
                ('pricing_period', models.CharField(choices=PricingPeriod.CHOICES, default='NIGHT', max_length=10)),
                ('description', models.TextField(blank=True)),
                ('amenities', models.TextField(blank=True, help_text="Comma separated, e.g. 'WiFi, TV, Mini bar'")),
                ('images', models.TextField(blank=True, help_text='One image URL per line')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('block', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='rooms', to='blocks.block')),
                ('room_type', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='rooms', to='rooms.roomtype')),
            ],
            options={
                'verbose_name': 'Room',
                'verbose_name_plural': 'Rooms',
                'ordering': ['number'],
                'indexes': [
                    models.Index(fields=['status'], name='room_status_idx'),
                    models.Index(fields=['block', 'status'], name='room_block_status_idx'),
                    models.Index(fields=['room_type', 'status'], name='room_type_status_idx'),
                ],
                'unique_together': {('block', 'number')},
            },
        ),
        migrations.CreateModel(
            name='RoomAsset',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ('condition', models.CharField(choices=AssetCondition.CHOICES, default='GOOD', max_length=20)),
                ('notes', models.TextField(blank=True)),
                ('assigned_at', models.DateTimeField(auto_now_add=True)),
                ('asset', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='room_assets', to='rooms.asset')),
                ('room', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='room_assets', to='rooms.room')),
            ],
            options={
                'verbose_name': 'Room Asset',
                'verbose_name_plural': 'Room Assets',
                'unique_together': {('room', 'asset')},
            },
        ),
    ]
