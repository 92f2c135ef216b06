from django.urls import path
from . import views

app_name = 'guests'

urlpatterns = [
    path('', views.guest_list, name='list'),
    path('create/', views.guest_create, name='create'),
    path('import/', views.guest_import, name='import'),
    path('import/template/', views.guest_import_template, name='import_template'),
    path('<int:guest_id>/', views.guest_detail, name='detail'),
    path('<int:guest_id>/edit/', views.guest_edit, name='edit'),
    path('<int:guest_id>/delete/', views.guest_delete, name='delete'),
]
