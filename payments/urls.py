from django.urls import path
from . import views

app_name = 'payments'

urlpatterns = [
    path('', views.payment_list, name='list'),
    path('create/', views.payment_create, name='create'),
    path('export/', views.payment_export, name='export'),
    path('<int:payment_id>/status/', views.payment_update_status, name='update_status'),
    path('<int:payment_id>/receipt/', views.payment_receipt, name='receipt'),
    path('deposits/', views.deposit_list, name='deposit_list'),
    path('deposits/collect/', views.deposit_collect, name='deposit_collect'),
    path('deposits/<int:deposit_id>/refund/', views.deposit_refund, name='deposit_refund'),
]
