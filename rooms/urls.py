from django.urls import path
from . import views

app_name = 'rooms'

urlpatterns = [
    path('', views.room_list, name='list'),
    path('create/', views.room_create, name='create'),
    path('<int:room_id>/', views.room_detail, name='detail'),
    path('<int:room_id>/edit/', views.room_edit, name='edit'),
    path('<int:room_id>/status/', views.room_update_status, name='update_status'),
    path('<int:room_id>/assets/assign/', views.room_assign_asset, name='assign_asset'),
    path('assets/', views.asset_list, name='asset_list'),
    path('assets/create/', views.asset_create, name='asset_create'),
]
