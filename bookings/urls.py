from django.urls import path
from . import views

app_name = 'bookings'

urlpatterns = [
    path('', views.booking_list, name='list'),
    path('create/', views.booking_create, name='create'),
    path('mine/', views.my_bookings, name='my_bookings'),
    path('deleted/', views.deleted_bookings, name='deleted'),
    path('<int:booking_id>/', views.booking_detail, name='detail'),
    path('<int:booking_id>/edit/', views.booking_edit, name='edit'),
    path('<int:booking_id>/status/', views.booking_update_status, name='update_status'),
    path('<int:booking_id>/extend/', views.booking_extend, name='extend'),
    path('<int:booking_id>/delete/', views.booking_soft_delete, name='soft_delete'),
    path('<int:booking_id>/restore/', views.booking_restore, name='restore'),
    path('<int:booking_id>/purge/', views.booking_hard_delete, name='hard_delete'),
    path('<int:booking_id>/services/add/', views.booking_add_service, name='add_service'),
]
