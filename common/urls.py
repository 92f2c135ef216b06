from django.urls import path
from . import views

app_name = 'common'

urlpatterns = [
    path('', views.settings_list, name='settings'),
    path('add/', views.setting_edit, name='setting_add'),
    path('<int:setting_id>/edit/', views.setting_edit, name='setting_edit'),
]
