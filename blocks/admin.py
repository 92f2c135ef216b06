from django.contrib import admin
from .models import Block


@admin.register(Block)
class BlockAdmin(admin.ModelAdmin):
    list_display = ['name', 'location', 'floors', 'total_rooms', 'created_at']
    search_fields = ['name', 'location', 'description']
