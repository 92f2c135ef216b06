# Generated manually for the initial schema

from django.db import migrations, models

from core.constants import SettingCategory


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Setting',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('key', models.CharField(max_length=100, unique=True)),
                ('value', models.TextField(blank=True, default='')),
                ('is_secret', models.BooleanField(default=False, help_text='Mask the value when listed')),
                ('description', models.CharField(blank=True, default='', max_length=255)),
                ('category', models.CharField(choices=SettingCategory.CHOICES, default='GENERAL', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Setting',
                'verbose_name_plural': 'Settings',
                'ordering': ['category', 'key'],
                'indexes': [models.Index(fields=['category'], name='setting_category_idx')],
            },
        ),
    ]
