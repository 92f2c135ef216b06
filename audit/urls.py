"""
Audit Log URLs
"""

from django.urls import path
from audit import views

app_name = 'audit'

urlpatterns = [
    path('', views.audit_log_list, name='list'),
]
