# Generated manually for the initial schema

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

from core.constants import BookingStatus


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('rooms', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Booking',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('check_in', models.DateTimeField()),
                ('check_out', models.DateTimeField()),
                ('guests', models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ('total_amount', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('status', models.CharField(choices=BookingStatus.CHOICES, default='PENDING', max_length=20)),
                ('special_requests', models.TextField(blank=True)),
                ('deleted_at', models.DateTimeField(blank=True, help_text='Set when moved to trash', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('guest', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='bookings', to=settings.AUTH_USER_MODEL)),
                ('room', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='bookings', to='rooms.room')),
            ],
            options={
                'verbose_name': 'Booking',
                'verbose_name_plural': 'Bookings',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status'], name='booking_status_idx'),
                    models.Index(fields=['room', 'check_in', 'check_out'], name='booking_room_window_idx'),
                    models.Index(fields=['guest', 'status'], name='booking_guest_status_idx'),
                    models.Index(fields=['deleted_at'], name='booking_deleted_at_idx'),
                    models.Index(fields=['check_out'], name='booking_check_out_idx'),
                ],
            },
        ),
    ]
