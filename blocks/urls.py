from django.urls import path
from . import views

app_name = 'blocks'

urlpatterns = [
    path('', views.block_list, name='list'),
    path('add/', views.add_block, name='add'),
    path('<int:block_id>/', views.block_detail, name='detail'),
    path('<int:block_id>/edit/', views.edit_block, name='edit'),
    path('<int:block_id>/delete/', views.delete_block, name='delete'),
]
