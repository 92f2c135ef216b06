# Generated manually for the initial schema

import django.db.models.deletion
from django.db import migrations, models

from core.constants import MaintenanceStatus, MaintenanceType, Priority


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('rooms', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='MaintenanceLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('type', models.CharField(choices=MaintenanceType.CHOICES, max_length=20)),
                ('description', models.TextField()),
                ('status', models.CharField(choices=MaintenanceStatus.CHOICES, default='PENDING', max_length=20)),
                ('priority', models.CharField(choices=Priority.CHOICES, default='MEDIUM', max_length=20)),
                ('reported_by', models.CharField(blank=True, max_length=100)),
                ('assigned_to', models.CharField(blank=True, max_length=100)),
                ('start_date', models.DateTimeField(blank=True, null=True)),
                ('end_date', models.DateTimeField(blank=True, null=True)),
                ('cost', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('asset', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='maintenance_logs', to='rooms.asset')),
                ('room', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='maintenance_logs', to='rooms.room')),
            ],
            options={
                'verbose_name': 'Maintenance Log',
                'verbose_name_plural': 'Maintenance Logs',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status'], name='maintenance_status_idx'),
                    models.Index(fields=['room', 'status'], name='maintenance_room_status_idx'),
                    models.Index(fields=['priority', 'status'], name='maintenance_priority_idx'),
                ],
            },
        ),
    ]
