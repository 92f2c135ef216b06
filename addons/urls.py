from django.urls import path
from . import views

app_name = 'addons'

urlpatterns = [
    path('', views.service_list, name='list'),
    path('create/', views.service_create, name='create'),
    path('<int:service_id>/edit/', views.service_edit, name='edit'),
    path('<int:service_id>/delete/', views.service_delete, name='delete'),
]
