from django.urls import path
from . import views

app_name = 'dashboard'

urlpatterns = [
    path('', views.home, name='home'),
    path('analytics/', views.analytics, name='analytics'),
    path('monitoring/', views.checkout_monitor, name='monitoring'),
    path('reports/', views.reports, name='reports'),
    path('reports/export/', views.report_export, name='report_export'),
]
