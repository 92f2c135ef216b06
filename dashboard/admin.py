from django.contrib import admin
from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ['guest', 'booking', 'rating', 'category', 'created_at']
    list_filter = ['rating', 'category']
    search_fields = ['title', 'comment', 'guest__username']
