# Generated manually for the initial schema

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

from core.constants import AuditAction, AuditResource


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='AuditLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(choices=AuditAction.CHOICES, db_index=True, max_length=20)),
                ('resource_type', models.CharField(choices=AuditResource.CHOICES, db_index=True, max_length=50)),
                ('resource_id', models.IntegerField(blank=True, db_index=True, null=True)),
                ('description', models.TextField()),
                ('ip_address', models.GenericIPAddressField(blank=True, null=True)),
                ('user_agent', models.TextField(blank=True, default='')),
                ('metadata', models.JSONField(blank=True, default=dict)),
                ('timestamp', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='audit_logs', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Audit Entry',
                'verbose_name_plural': 'Audit Trail',
                'ordering': ['-timestamp'],
                'indexes': [
                    models.Index(fields=['resource_type', 'resource_id'], name='audit_resource_idx'),
                    models.Index(fields=['action', '-timestamp'], name='audit_action_time_idx'),
                ],
            },
        ),
    ]
