from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    path('login/', views.login_view, name='login'),
    path('logout/', views.logout_view, name='logout'),
    path('register/', views.register, name='register'),
    path('profile/', views.profile, name='profile'),
    path('password/', views.change_password, name='change_password'),
    path('manage/', views.user_list, name='user_list'),
    path('manage/create/', views.user_create, name='user_create'),
    path('manage/<int:user_id>/role/', views.user_role, name='user_role'),
]
