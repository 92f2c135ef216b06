from django.shortcuts import render, redirect
from django.contrib.auth import login, logout, authenticate, update_session_auth_hash
from django.contrib.auth.decorators import login_required
from django.contrib.auth.forms import PasswordChangeForm
from django.contrib import messages
from django.views.decorators.csrf import csrf_protect
from django.views.decorators.http import require_POST
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from common.decorators import admin_required, handle_errors, home_url_name
from audit.helpers import log_user_change
from api.permissions import IsAdminRole
from .forms import RegisterForm, UserCreateForm, ProfileForm, RoleForm
from .models import User
from .serializers import UserSerializer, UserProfileSerializer
from .services import UserService


# Template views

@csrf_protect
def login_view(request):
    """Login view"""
    if request.user.is_authenticated:
        return redirect(home_url_name(request.user))

    if request.method == 'POST':
        username = request.POST.get('username')
        password = request.POST.get('password')
        user = authenticate(request, username=username, password=password)
        if user:
            login(request, user)
            next_url = request.POST.get('next') or request.GET.get('next')
            if next_url and next_url.startswith('/'):
                return redirect(next_url)
            return redirect(home_url_name(user))
        messages.error(request, 'Invalid username or password.')

    return render(request, 'users/login.html')


def logout_view(request):
    logout(request)
    messages.info(request, 'You have been logged out.')
    return redirect('users:login')


@csrf_protect
def register(request):
    """Guest self-registration"""
    if request.user.is_authenticated:
        return redirect(home_url_name(request.user))

    form = RegisterForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        user = form.save()
        user = authenticate(
            request, username=user.username, password=form.cleaned_data.get('password1')
        )
        if user:
            login(request, user)
            messages.success(request, f'Welcome {user.full_name}! Your account has been created.')
            return redirect(home_url_name(user))
    return render(request, 'users/register.html', {'form': form})


@login_required
def profile(request):
    """View and edit own details"""
    form = ProfileForm(request.POST or None, instance=request.user)
    if request.method == 'POST' and form.is_valid():
        form.save()
        messages.success(request, 'Profile updated successfully.')
        return redirect('users:profile')
    return render(request, 'users/profile.html', {'form': form})


@login_required
def change_password(request):
    form = PasswordChangeForm(request.user, request.POST or None)
    if request.method == 'POST' and form.is_valid():
        user = form.save()
        update_session_auth_hash(request, user)
        messages.success(request, 'Password changed successfully.')
        return redirect('users:profile')
    return render(request, 'users/change_password.html', {'form': form})


@login_required
@admin_required
@handle_errors
def user_list(request):
    """All users, optionally filtered by role"""
    users = User.objects.all().order_by('role', 'username')
    role = request.GET.get('role')
    if role:
        users = users.filter(role=role)
    return render(request, 'users/user_list.html', {
        'users': users,
        'role_counts': UserService().users_by_role(),
        'selected_role': role or '',
        'role_form': RoleForm(),
    })


@login_required
@admin_required
@handle_errors
def user_create(request):
    """Create a user with any role"""
    form = UserCreateForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        user = form.save()
        log_user_change(request.user, user, f"Created user {user.username} ({user.role})",
                        request=request, created=True)
        messages.success(request, f'User "{user.username}" created.')
        return redirect('users:user_list')
    return render(request, 'users/user_form.html', {'form': form})


@login_required
@admin_required
@require_POST
@handle_errors
def user_role(request, user_id):
    """Change a user's role"""
    service = UserService()
    target = service.get_user(user_id)
    form = RoleForm(request.POST)
    if not form.is_valid():
        messages.error(request, 'Please choose a valid role.')
        return redirect('users:user_list')
    old_role = target.role
    service.change_role(request.user, target, form.cleaned_data['role'])
    log_user_change(request.user, target, f"Changed role of {target.username}: {old_role} → {target.role}",
                    request=request)
    messages.success(request, f'{target.username} is now {target.get_role_display()}.')
    return redirect('users:user_list')


# API views

class UserViewSet(viewsets.ModelViewSet):
    """
    ViewSet for User management
    Administrators only, except `me` which any authenticated user can call.
    """
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]
    search_fields = ['username', 'email', 'first_name', 'last_name']
    ordering = ['username']

    def get_queryset(self):
        queryset = User.objects.all().order_by('username')
        role = self.request.query_params.get('role')
        if role:
            queryset = queryset.filter(role=role)
        return queryset

    def get_permissions(self):
        if self.action == 'me':
            return [IsAuthenticated()]
        return super().get_permissions()

    def perform_update(self, serializer):
        role = serializer.validated_data.get('role')
        if role and role != serializer.instance.role:
            UserService().change_role(self.request.user, serializer.instance, role)
        serializer.save()

    def destroy(self, request, *args, **kwargs):
        user = self.get_object()
        if user.pk == request.user.pk:
            return Response({'detail': 'You cannot delete your own account'},
                            status=status.HTTP_400_BAD_REQUEST)
        return super().destroy(request, *args, **kwargs)

    @action(detail=False, methods=['get', 'patch'])
    def me(self, request):
        """Current user's own record"""
        if request.method == 'PATCH':
            serializer = UserProfileSerializer(request.user, data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            serializer.save()
            return Response(serializer.data)
        return Response(UserProfileSerializer(request.user).data)
